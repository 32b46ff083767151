from sqlalchemy import Column, String
from database import Base

class User(Base):
    __tablename__ = "users"
    username = Column(String(25), primary_key=True)
    password = Column(String, nullable=False)  # bcrypt hash, never returned from reads
    email = Column(String, nullable=False)
