# 依赖注入（DB 会话、单例服务）
from app.core.database import SessionLocal
from app.linking.services import LinkingService, TermCatalogService

_catalog_service = TermCatalogService()
_linking_service = LinkingService(_catalog_service)


def get_db():
    db = SessionLocal()  # 1. 建立连接
    try:
        yield db         # 2. 把连接“借”给接口用
    finally:
        db.close()       # 3. 接口用完后关闭连接


def get_term_catalog_service() -> TermCatalogService:
    return _catalog_service


def get_linking_service() -> LinkingService:
    return _linking_service
