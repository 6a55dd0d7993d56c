# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI

from app.api.handlers import gateway_error_handler
from app.api.routes import router
from app.core.errors import GatewayError

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="Voice Search Gateway")
app.add_exception_handler(GatewayError, gateway_error_handler)
app.include_router(router)


if __name__ == "__main__":
    print("Voice search gateway booting...")
