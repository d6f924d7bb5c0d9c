from sqlalchemy import String, Integer, DateTime, func
from sqlalchemy.orm import mapped_column, DeclarativeBase


class Base(DeclarativeBase): ...


# ---------- Referrals ----------
class Referral(Base):
    __tablename__ = "referrals"
    id             = mapped_column(Integer, primary_key=True)
    referrer_name  = mapped_column(String(255), nullable=False)
    referrer_email = mapped_column(String(255), nullable=False)
    referee_name   = mapped_column(String(255), nullable=False)
    referee_email  = mapped_column(String(255), nullable=False)
    course         = mapped_column(String(255), nullable=False)
    created_at     = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Referral id={self.id} course={self.course!r}>"
