from sqlalchemy import Column, Integer, Numeric, String, Text
from shared.config.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True, index=True)
    quantity = Column(Integer, nullable=False, default=0) # mirrors inventory.quantity
