from sqlalchemy import Column, Integer, String, DateTime, JSON, UniqueConstraint
from sqlalchemy.sql import func
from maktab.database import Base


class Document(Base):
    """One record of a collection in the remote document store."""
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    collection = Column(String(100), nullable=False, index=True)
    key = Column(String(255), nullable=False)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("collection", "key", name="uq_documents_collection_key"),
    )

    def __repr__(self):
        return f"<Document(collection='{self.collection}', key='{self.key}')>"
