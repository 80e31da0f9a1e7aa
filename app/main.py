# 服务入口：日志 + FastAPI 应用
import sys

from fastapi import FastAPI
from loguru import logger

from app.api.v1.router import api_router
from app.core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def setup_logger(level: str | None = None, log_file: str | None = None) -> None:
    """控制台 sink；配置了 LOG_FILE 时再加一个按大小轮转的文件 sink。"""
    level = level or settings.LOG_LEVEL
    log_file = settings.LOG_FILE if log_file is None else log_file

    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)
    if log_file:
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation="100 MB",
            retention="10 days",
            compression="zip",
        )
    logger.debug(f"日志已就绪: level={level} file={log_file or '-'}")


setup_logger()

app = FastAPI(
    title="Glossary Autolink - 词条自动链接",
    description="把定义、评论、备注中的已发布词条改写为可跳转引用，支持嵌套词条与消歧",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info(
        f"词条自动链接服务启动: debug={settings.DEBUG} route_prefix={settings.LINKING_ROUTE_PREFIX} "
        f"max_depth={settings.LINKING_MAX_DEPTH} index_ttl={settings.TERM_INDEX_TTL_SECONDS}s"
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("词条自动链接服务已关闭")


@app.get("/")
def health_check():
    return {"status": "ok", "service": "glossary-autolink", "version": app.version}
