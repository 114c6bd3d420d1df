"""应用入口：按当前业务包组装 FastAPI 实例、中间件、异常处理与路由。"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from app.packages import get_active_package

package = get_active_package()
package.setup_logging()
settings = package.get_settings()
logger = package.logger
create_response = package.create_response

app = FastAPI(title=settings.project_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)
app.add_middleware(RequestIdMiddleware)


@app.on_event("startup")
async def startup_event() -> None:
    """执行业务包的启动钩子（建表、准备目录镜像根目录），确认服务可用后输出成功日志。"""
    package.run_startup()
    logger.info("SUCCESS - %s running at http://127.0.0.1:%s", settings.project_name, settings.app_port)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):  # pragma: no cover - framework glue
    """请求体或参数类型不合法时返回 422 信封，错误明细放在 data 中。"""
    errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=create_response("Request validation failed.", errors, status.HTTP_422_UNPROCESSABLE_ENTITY),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):  # pragma: no cover - framework glue
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await package.generic_exception_handler(request, exc)


app.add_exception_handler(HTTPException, package.http_exception_handler)


@app.get("/health")
async def health_check() -> dict:
    return create_response("OK", {"status": "healthy"})


app.include_router(package.api_router, prefix=settings.api_v1_str)
