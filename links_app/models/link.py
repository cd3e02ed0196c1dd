from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from links_app.database.connection import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(Base):
    """
    A short code and the URL it redirects to.
    
    ``code`` and ``target_url`` never change after creation; only the
    redirect path touches ``total_clicks`` and ``last_clicked``.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique=True + index=True gives a unique index (ix_links_code) for the redirect lookup
    code = Column(String(8), unique=True, nullable=False, index=True)
    target_url = Column(Text, nullable=False)
    total_clicks = Column(Integer, nullable=False, default=0, server_default="0")
    last_clicked = Column(DateTime(timezone=True), nullable=True)
    # Python-side default keeps microsecond precision so creation order is stable
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Link code={self.code!r} clicks={self.total_clicks}>"
