"""
SQL metadata store implementation.
"""

from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from huissier.domain.entities.authorization_record import AuthorizationRecord
from huissier.domain.exceptions import DuplicateEntityError
from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.persistence.models import AuthorizedWalletModel

# Transaction-local (third argument true): cleared when the request's
# transaction ends, so pooled connections never carry it over.
SET_REQUEST_WALLET_SQL = text(
    "SELECT set_config('app.current_wallet', :wallet_address, true)"
)

UPDATABLE_FIELDS = ("name", "role", "is_active", "notes")


class SqlMetadataStore(IMetadataStore):
    """SQLAlchemy implementation of the metadata store."""

    def __init__(self, session: AsyncSession, row_level_security: bool = True):
        """
        Initialize store with database session.

        Args:
            session: SQLAlchemy async session (one per request)
            row_level_security: Set the request wallet in the database
                session (PostgreSQL only; SQLite has no set_config)
        """
        self.session = session
        self.row_level_security = row_level_security

    async def lookup_authorization(
        self, wallet_address: str
    ) -> Optional[AuthorizationRecord]:
        model = await self._get_model(wallet_address)
        return self._to_entity(model) if model else None

    async def set_request_identity(self, wallet_address: str) -> None:
        if not self.row_level_security:
            return
        await self.session.execute(
            SET_REQUEST_WALLET_SQL, {"wallet_address": wallet_address}
        )

    async def list_authorizations(self) -> List[AuthorizationRecord]:
        stmt = select(AuthorizedWalletModel).order_by(
            AuthorizedWalletModel.created_at.desc(),
            AuthorizedWalletModel.id.desc(),
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def add_authorization(
        self, record: AuthorizationRecord
    ) -> AuthorizationRecord:
        if await self._get_model(record.wallet_address) is not None:
            raise DuplicateEntityError(
                "Authorized wallet", f"address {record.wallet_address}"
            )

        model = AuthorizedWalletModel(
            wallet_address=record.wallet_address,
            name=record.name or None,
            role=record.role.value,
            is_active=record.is_active,
            notes=record.notes,
            created_by=record.created_by,
            created_at=record.created_at,
            updated_at=record.created_at,
        )

        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def update_authorization(
        self, wallet_address: str, changes: dict
    ) -> Optional[AuthorizationRecord]:
        model = await self._get_model(wallet_address)
        if model is None:
            return None

        for key in UPDATABLE_FIELDS:
            if key not in changes:
                continue
            value = changes[key]
            if key == "role":
                value = Role.parse(value).value
            setattr(model, key, value)

        await self.session.flush()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def _get_model(
        self, wallet_address: str
    ) -> Optional[AuthorizedWalletModel]:
        stmt = select(AuthorizedWalletModel).where(
            AuthorizedWalletModel.wallet_address == wallet_address
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: AuthorizedWalletModel) -> AuthorizationRecord:
        """
        Convert database model to domain entity.

        Args:
            model: AuthorizedWalletModel from database

        Returns:
            AuthorizationRecord entity
        """
        return AuthorizationRecord(
            wallet_address=model.wallet_address,
            role=Role.parse(model.role),
            name=model.name or "",
            is_active=bool(model.is_active),
            notes=model.notes,
            created_by=model.created_by,
            created_at=model.created_at,
        )
