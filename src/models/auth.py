"""Authentication provider tables.

Sessions, accounts and verifications are owned by the external auth
provider. They are declared so the schema is complete and foreign keys to
``user`` resolve.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint

from .base import Base, created_at_column, updated_at_column


class SessionModel(Base):
    __tablename__ = "session"
    __table_args__ = (
        Index("session_user_id_idx", "user_id"),
        UniqueConstraint("token", name="session_token_unique"),
    )

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("user.id"), nullable=False)
    token = Column(String, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)

    created_at = created_at_column()
    updated_at = updated_at_column()


class AccountModel(Base):
    __tablename__ = "account"
    __table_args__ = (
        Index("account_user_id_idx", "user_id"),
        UniqueConstraint(
            "provider_id", "account_id", name="account_provider_account_unique"
        ),
    )

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("user.id"), nullable=False)
    account_id = Column(String, nullable=False)
    provider_id = Column(String, nullable=False)
    access_token = Column(String, nullable=True)
    refresh_token = Column(String, nullable=True)
    access_token_expires_at = Column(DateTime(timezone=True), nullable=True)
    refresh_token_expires_at = Column(DateTime(timezone=True), nullable=True)
    scope = Column(String, nullable=True)
    id_token = Column(String, nullable=True)
    password = Column(String, nullable=True)

    created_at = created_at_column()
    updated_at = updated_at_column()


class VerificationModel(Base):
    __tablename__ = "verification"
    __table_args__ = (Index("verification_identifier_idx", "identifier"),)

    id = Column(String, primary_key=True)
    identifier = Column(String, nullable=False)
    value = Column(String, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()
