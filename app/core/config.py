# 读取 .env 配置
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # Database（DATABASE_URL 为空时按 DB_* 拼接 MySQL 连接串）
    DATABASE_URL: str = ""
    DB_SERVER: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "glossary_user"
    DB_PASSWORD: str = "glossary_password"
    DB_NAME: str = "glossary"

    # 自动链接
    LINKING_ROUTE_PREFIX: str = "/fiche"
    LINKING_MAX_DEPTH: int = 16
    LINKING_CHOICE_TITLE: str = "Termes trouvés :"
    TERM_INDEX_TTL_SECONDS: int = 300

    model_config = SettingsConfigDict(
        env_file=".env", 
        env_file_encoding="utf-8",
        extra="ignore" # 忽略多余的环境变量
    )

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        # 格式: mysql+pymysql://用户名:密码@地址:端口/数据库名
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_SERVER}:{self.DB_PORT}/{self.DB_NAME}"
        )

settings = Settings()
