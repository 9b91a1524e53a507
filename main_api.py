"""
Main entry point for the Course Evaluation Summarizer API

This file imports and runs the modular API from the course_eval_api package.
"""

from course_eval_api.app import app
from course_eval_api.config import settings

if __name__ == "__main__":
    import uvicorn

    print(f"🚀 Starting {settings.API_TITLE} v{settings.API_VERSION}")
    print(f"📍 Host: {settings.API_HOST}:{settings.API_PORT}")
    print(f"🤖 Model: {settings.ANTHROPIC_MODEL}")
    print(f"📄 Submission mode: {settings.SUBMISSION_MODE}")
    print(f"🔑 Service key: {'Configured ✓' if settings.is_service_key_configured else 'Not Configured ✗'}")
    print(f"📦 Max upload: {settings.MAX_UPLOAD_SIZE_MB} MB")
    print()

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
