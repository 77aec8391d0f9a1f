import uvicorn
from .core.config import settings


def main():
    uvicorn.run("edutrack.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
