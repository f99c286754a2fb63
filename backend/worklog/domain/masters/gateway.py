"""
Master Data Gateway Interface

Defines the request/response contract the reference cache uses to reach
the master-data source. Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from .entities import MasterCollection, MasterSnapshot, MasterType, MasterVersions


class MasterDataGateway(ABC):
    """
    Abstract gateway for reference-data retrieval.

    Every method is a single awaited round trip. Failures surface as
    ``TransportError`` (no response) or ``ServerError`` (5xx answer).
    """

    @abstractmethod
    async def load_all(self) -> MasterSnapshot:
        """
        Load all four collections plus their version tokens.

        Returns:
            MasterSnapshot with every collection populated

        Raises:
            TransportError: If no response was received
            ServerError: If the source answered with an error
        """
        pass

    @abstractmethod
    async def check_versions(self, versions: MasterVersions) -> list[MasterType]:
        """
        Compare locally held version tokens against the source.

        Args:
            versions: Tokens currently held by the caller

        Returns:
            Reference types whose token differs on the source side
        """
        pass

    @abstractmethod
    async def fetch_one(self, master_type: MasterType) -> MasterCollection:
        """
        Load one reference type's full collection and its token.

        Args:
            master_type: Collection to load

        Returns:
            MasterCollection for the requested type
        """
        pass
