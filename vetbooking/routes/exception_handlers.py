import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vetbooking.core.errors import SchedulingError

logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI's 422 body, plus the scheduling error code when a validator raised one."""
    errors = []
    for error in exc.errors():
        entry = {
            'loc': list(error.get('loc', ())),
            'msg': error.get('msg', ''),
            'type': error.get('type', ''),
        }
        cause = error.get('ctx', {}).get('error')
        if isinstance(cause, SchedulingError):
            entry['code'] = cause.code
            entry['msg'] = cause.message
        errors.append(entry)

    logger.info('Rejected request to %s: %s', request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={'detail': errors})
