"""
List Authorized Wallets use case.
"""

from typing import List

from huissier.domain.entities.authorization_record import AuthorizationRecord
from huissier.domain.repositories.i_metadata_store import IMetadataStore


class ListAuthorizedWallets:
    """List every authorized wallet record, active or not."""

    def __init__(self, metadata_store: IMetadataStore):
        self.metadata_store = metadata_store

    async def execute(self) -> List[AuthorizationRecord]:
        return await self.metadata_store.list_authorizations()
