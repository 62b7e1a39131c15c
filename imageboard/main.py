import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .routes import router
from .core import init_metrics, REQUESTS_REJECTED
from .errors import BoardError
import logging
from pythonjsonlogger import jsonlogger

# setup structured logging
logger = logging.getLogger('imageboard')
handler = logging.StreamHandler()
formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

MAX_BODY_SIZE = int(os.getenv('MAX_BODY_SIZE', str(5 * 1024 * 1024)))

app = FastAPI(title="Imageboard API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

@app.get('/healthz')
async def healthz():
    return {'status': 'ok'}

app.include_router(router)

@app.exception_handler(BoardError)
async def board_error_handler(request: Request, exc: BoardError):
    if exc.status_code >= 500:
        logger.error({'msg': 'request_failed', 'path': request.url.path, 'error': exc.code})
    else:
        REQUESTS_REJECTED.labels(error=exc.code).inc()
        logger.info({'msg': 'request_rejected', 'path': request.url.path, 'error': exc.code, 'detail': exc.message})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.middleware('http')
async def limit_body_size(request: Request, call_next):
    # only declared lengths are checked; chunked bodies are left to the proxy in front
    length = request.headers.get('content-length')
    if length and length.isdigit() and int(length) > MAX_BODY_SIZE:
        REQUESTS_REJECTED.labels(error='body_too_large').inc()
        return JSONResponse(status_code=413, content={'error': 'body_too_large', 'detail': f'body exceeds {MAX_BODY_SIZE} bytes'})
    return await call_next(request)

@app.middleware('http')
async def log_requests(request: Request, call_next):
    logger.info({'msg':'request_start','method':request.method,'path':request.url.path})
    response = await call_next(request)
    logger.info({'msg':'request_end','status': response.status_code})
    return response

@app.on_event("startup")
async def startup():
    # Best-effort init, don't block app from starting if the exporter can't bind
    init_metrics()
