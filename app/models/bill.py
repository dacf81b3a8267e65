from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey
from app.core.database import Base

class Bill(Base):
    __tablename__ = "bills"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    due_date = Column(Date, nullable=False, index=True)
    logo_url = Column(String(500), nullable=True)
    item_description = Column(String(500), nullable=False)
    last_charge_date = Column(Date, nullable=True)
    amount = Column(Numeric(15, 2), nullable=False)
