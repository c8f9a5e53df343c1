from sqlalchemy import Column, Integer, Numeric, String

from bank_transfers.db.session import Base


class AccountModel(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String(255), nullable=False)
    balance = Column(Numeric(15, 2, asdecimal=True), nullable=False, default=0)


class BankModel(Base):
    __tablename__ = "banks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    total_transfers = Column(Integer, nullable=False, default=0)
