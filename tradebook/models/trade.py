import datetime as dt

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Integer, String, Text, Time, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from tradebook.db.database import Base

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


class Trade(Base):
    __tablename__ = "trades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[dt.time | None] = mapped_column(Time, nullable=True)

    pair: Mapped[str] = mapped_column(String(30), nullable=False)  # EURUSD, XAUUSD, ...
    direction: Mapped[str] = mapped_column(String(10), nullable=False)  # long / short

    # percentages of entry price
    target: Mapped[float | None] = mapped_column(Float, nullable=True)
    stop_loss: Mapped[float | None] = mapped_column(Float, nullable=True)

    result: Mapped[str] = mapped_column(String(20), nullable=False)
    pnl: Mapped[float | None] = mapped_column(Float, nullable=True)

    emotion: Mapped[str | None] = mapped_column(String(50), nullable=True)

    confluences_pro: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
    confluences_contro: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
    image_urls: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
