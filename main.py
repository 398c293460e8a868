# main.py
from dotenv import load_dotenv
load_dotenv()

import uvicorn

from tbank_bonus.app_factory import create_app
from tbank_bonus.core.config import settings
from tbank_bonus.core.logging_setup import setup_logging

setup_logging(settings.LOG_LEVEL)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
