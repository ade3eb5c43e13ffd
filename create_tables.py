from academy.db import models  # noqa: F401
from academy.db.base import Base
from academy.db.session import engine

if __name__ == "__main__":
    print("Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created.")
