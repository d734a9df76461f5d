"""Launch the roof takeoff FastAPI server."""

import uvicorn

from roof_takeoff.config import EngineSettings
from roof_takeoff.logger import setup_logging


def main():
    settings = EngineSettings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run("roof_takeoff.server:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    main()
