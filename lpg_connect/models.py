"""SQLAlchemy ORM models for the durable LPG Connect store."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func

from lpg_connect.database import Base


class UserRecord(Base):
    """A row of the ``users`` table.

    Attributes:
        username: Primary key; unique login name.
        password: Stored as entered (no hashing).
        role: ``ADMIN`` or ``USER``.
    """

    __tablename__ = "users"

    username = Column(String(50), primary_key=True)
    password = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)

    def __repr__(self):
        return f"<UserRecord(username={self.username!r}, role={self.role!r})>"


class ApplicationRecord(Base):
    """A row of the ``applications`` table (one LPG connection request).

    Attributes:
        app_id: Auto-incremented primary key.
        applicant_username: The user who submitted the request.
        name: Applicant's full name.
        mobile_no: Ten digit mobile number.
        address: Installation address.
        num_connections: Number of connections requested.
        status: ``PENDING``, ``APPROVED`` or ``REJECTED``.
        created_at: Stamped by the database on insert.
    """

    __tablename__ = "applications"

    app_id = Column(Integer, primary_key=True, autoincrement=True)
    applicant_username = Column(
        String(50), ForeignKey("users.username"), nullable=False
    )
    name = Column(String(100), nullable=False)
    mobile_no = Column(String(15), nullable=False)
    address = Column(Text, nullable=False)
    num_connections = Column(Integer, nullable=False)
    status = Column(String(20), default="PENDING", server_default="PENDING")
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_applicant_username", "applicant_username"),
        Index("idx_created_at", "created_at"),
    )

    def __repr__(self):
        return (
            f"<ApplicationRecord(app_id={self.app_id}, "
            f"applicant_username={self.applicant_username!r}, status={self.status!r})>"
        )
