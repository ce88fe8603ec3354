from __future__ import annotations
import logging
import dotenv
dotenv.load_dotenv()

from geocoder_bridge.api import create_app
from geocoder_bridge.config import load_api_config, load_settings
from geocoder_bridge.service import LookupService

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

service = LookupService(
    load_api_config(settings.config_path),
    settings.config_path,
    timeout=settings.timeout,
)
app = create_app(service)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
