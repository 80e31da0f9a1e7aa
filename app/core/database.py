# 数据库连接池生成器
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.config import settings

# pool_recycle=3600: MySQL 默认会断开空闲 8 小时的连接，这里设置每 1 小时回收重连
# pool_pre_ping=True: 每次从池子里拿连接前，先 ping 一下数据库，确保连接是活的
engine = create_engine(
    settings.sqlalchemy_database_url,
    pool_recycle=3600,
    pool_pre_ping=True
)

# 每个请求由 deps.get_db 从这里拿一个新会话
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 所有的 Model 都继承这个类
Base = declarative_base()
