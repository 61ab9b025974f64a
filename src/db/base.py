"""
데이터베이스 Base 클래스
"""
from sqlalchemy.orm import declarative_base

Base = declarative_base()
