# 路由汇总
from fastapi import APIRouter
from app.api.v1.endpoints import linking, terms

api_router = APIRouter()

# 挂载自动链接模块 (访问地址: /api/v1/linking/...)
api_router.include_router(linking.router, prefix="/linking", tags=["词条自动链接"])

# 挂载词条目录模块 (访问地址: /api/v1/terms/...)
api_router.include_router(terms.router, prefix="/terms", tags=["词条目录"])
