"""
Development entry point.

    python main.py
    uvicorn digitizer.main:app --reload --port 5000
"""
from digitizer.main import app
from digitizer.core.config import PORT

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
