# market/core/reset_db.py
from market.core.config import settings
from market.core.db import Base, get_engine

# 한번만 실행하는 스크립트
def reset_db(url: str = settings.DATABASE_URL):
    engine = get_engine(url)
    print("데이터베이스 초기화 중...", engine.url.get_backend_name())
    Base.metadata.drop_all(bind=engine, checkfirst=True)
    Base.metadata.create_all(bind=engine)
    print("초기화 완료!")

if __name__ == "__main__":
    reset_db()
