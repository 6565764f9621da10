"""SDK clients.

- playfab.AptoPlay: the public facade
- google.GoogleProfileClient: Google profile lookup for social login
- aptos.AptosClient: Aptos faucet minting and balance lookup
"""

from .aptos import AptosClient
from .google import GoogleProfileClient
from .models import ErrorKind, StatisticUpdate, StatisticVersion
from .playfab import AptoPlay

__all__ = [
    "AptoPlay",
    "AptosClient",
    "GoogleProfileClient",
    "ErrorKind",
    "StatisticUpdate",
    "StatisticVersion",
]
