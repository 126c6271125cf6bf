"""
Document Service - Business logic for newspaper documents.

Coordinates the file storage, the image preprocessor, the AI pipeline and the
document store. Raises business exceptions only; routers map them to HTTP.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from ..api.dto import SummaryProjectionDTO
from ..api.exceptions import DocumentNotFoundError
from ..api.mappers import DocumentMapper
from ..core.config import RAW_TEXT_STORE_LIMIT
from ..core.logging_config import get_logger
from ..models.document import ExtractedData, NewspaperDocument, SummaryData
from ..utils.document_utils import (
    build_upload_filename,
    generate_document_id,
    public_upload_path,
    utc_now_iso,
)
from ..utils.validators import validate_image_upload
from .database.base import DatabaseInterface
from .image_preprocessor import preprocess_image
from .pipeline import NewspaperPipeline, StageResult
from .providers.base import ImageInput
from .storage.base import FileStorageInterface

logger = get_logger(__name__)

PROCESSED_MIME_TYPE = "image/jpeg"


@dataclass
class ProcessedUpload:
    """A stored document plus how each recoverable stage went."""
    document: NewspaperDocument
    structure: StageResult[ExtractedData]
    summary: StageResult[SummaryData]


class DocumentService:
    """
    Service for newspaper document operations.
    """

    def __init__(
        self,
        store: DatabaseInterface,
        storage: FileStorageInterface,
        pipeline: NewspaperPipeline
    ):
        """
        Initialize document service with dependencies.

        Args:
            store: Document store adapter
            storage: File storage for originals and processed images
            pipeline: AI pipeline bound to a provider
        """
        self._store = store
        self._storage = storage
        self._pipeline = pipeline

    async def process_upload(self, file: Optional[UploadFile]) -> ProcessedUpload:
        """
        Save, preprocess and digitize an uploaded newspaper image.

        Steps:
        1. Validate the upload is an image
        2. Save the original under '<id>-<original name>'
        3. Preprocess into '<stem>_processed.jpg'
        4. Run extract -> structure -> summarize
        5. Store the document record

        Raises:
            InvalidUploadError: no file or not an image
            ImagePreprocessingError: Pillow could not process the file
            TextExtractionError: the first AI stage failed
        """
        validate_image_upload(
            file.filename if file else None,
            file.content_type if file else None
        )

        doc_id = generate_document_id()
        original_name = file.filename
        logger.info(f"Processing file: {original_name}")

        filename = await self._storage.save_file(file, build_upload_filename(doc_id, original_name))
        saved_path = self._storage.get_full_path(filename)
        processed_path: Optional[Path] = None

        try:
            processed_path = await preprocess_image(saved_path)
            image = ImageInput(data=processed_path.read_bytes(), mime_type=PROCESSED_MIME_TYPE)

            logger.info("Step 1: Extracting all text...")
            all_text = await self._pipeline.extract_text(image)

            logger.info("Step 2: Structuring text...")
            structure = await self._pipeline.structure_text(all_text)

            logger.info("Step 3: Generating summaries...")
            summary = await self._pipeline.summarize(structure.data)

            document = NewspaperDocument(
                id=doc_id,
                filename=filename,
                original_name=original_name,
                image_path=public_upload_path(filename),
                processed_image_path=public_upload_path(processed_path.name),
                upload_date=utc_now_iso(),
                extracted_data=structure.data,
                summary_data=summary.data,
                raw_extracted_text=all_text[:RAW_TEXT_STORE_LIMIT],
            )
            document = await self._store.create_document(document)
        except Exception:
            await self._discard_files(filename, processed_path.name if processed_path else None)
            raise

        logger.info(
            f"Document {doc_id} stored: {len(document.extracted_data.headlines)} headlines, "
            f"extraction={structure.data.extraction_method.value}, summary={summary.status.value}"
        )
        return ProcessedUpload(document=document, structure=structure, summary=summary)

    async def list_documents(self) -> List[NewspaperDocument]:
        """All documents in insertion order."""
        return await self._store.get_all_documents()

    async def get_document(self, doc_id: str) -> NewspaperDocument:
        """
        Raises:
            DocumentNotFoundError: unknown id
        """
        document = await self._store.get_document(doc_id)
        if document is None:
            raise DocumentNotFoundError(doc_id)
        return document

    async def get_summary(self, doc_id: str) -> SummaryProjectionDTO:
        document = await self.get_document(doc_id)
        return DocumentMapper.to_summary_projection(document)

    async def search(self, query: Optional[str]) -> List[NewspaperDocument]:
        return await self._store.search_documents(query)

    async def regenerate_summary(self, doc_id: str) -> SummaryData:
        """
        Re-run the summary stage for a stored document.

        Only summary_data is replaced. On any AI failure the document is left
        unchanged and the error propagates.

        Raises:
            DocumentNotFoundError: unknown id
            UpstreamFailure: the AI call failed or returned unusable output
        """
        document = await self.get_document(doc_id)
        logger.info(f"Regenerating summary for document: {doc_id}")

        summary = await self._pipeline.generate_summary(document.extracted_data)

        updated = await self._store.update_document(doc_id, {"summary_data": summary})
        if updated is None:
            # Deleted while the model was running
            raise DocumentNotFoundError(doc_id)
        return summary

    async def delete_document(self, doc_id: str) -> NewspaperDocument:
        """
        Remove the record, then its original and processed images.

        File removal is best effort; the record is gone either way.

        Raises:
            DocumentNotFoundError: unknown id
        """
        removed = await self._store.delete_document(doc_id)
        if removed is None:
            raise DocumentNotFoundError(doc_id)

        await self._discard_files(removed.filename, Path(removed.processed_image_path).name)
        logger.info(f"Deleted document {doc_id}")
        return removed

    async def _discard_files(self, *filenames: Optional[str]):
        for name in filenames:
            if not name:
                continue
            try:
                await self._storage.delete_file(name)
            except OSError as e:
                logger.error(f"Error deleting file {name}: {e}")
