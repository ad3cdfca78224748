from sqlalchemy import Column, Integer, String, Text
import json

from .db import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String)
    last_name = Column(String)
    email = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash, never the plaintext
    password = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    date_of_birth = Column(String)
    gender = Column(String)
    class_name = Column(String)
    school_name = Column(String)
    description = Column(Text)
    # JSON-serialized list of exams
    exams = Column(Text)

    def exam_list(self) -> list:
        """Deserialize the stored exams; empty list when nothing was stored."""
        if not self.exams:
            return []
        exams = json.loads(self.exams)
        return exams if exams is not None else []
