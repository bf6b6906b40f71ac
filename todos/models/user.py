from sqlalchemy import Column, String

from todos.database import Base


class User(Base):
    __tablename__ = "users"
    username = Column(String(64), primary_key=True)
    # bcrypt hash, never the plaintext
    password_hash = Column(String(128), nullable=False)
