import structlog
from fastapi import Request


def get_logger(request: Request) -> structlog.stdlib.BoundLogger:
    return request.app.state.logger
