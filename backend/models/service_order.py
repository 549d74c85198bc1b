from sqlalchemy import Boolean, Column, Integer, String, Text, ForeignKey, DateTime, func, false
from sqlalchemy.orm import relationship
from database import Base


class ServiceOrder(Base):
    __tablename__ = "service_orders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    is_approved = Column(Boolean, nullable=False, default=False, server_default=false())

    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_date = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    project = relationship("Project", back_populates="service_orders")

    @property
    def project_name(self):
        return self.project.name if self.project is not None else None
