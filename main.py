from jobly.application import create_app
from jobly.core.config import Settings
from jobly.core.logging_config import setup_logging

settings = Settings()

# Configure logging
setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)

# Create FastAPI application
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level=settings.LOG_LEVEL.lower()
    )
