import uvicorn

from shared.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "property_service.app.main:app",
        host="0.0.0.0",
        port=8002,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
