"""AptoPlay: a thin SDK over PlayFab, Google social login and the Aptos faucet."""

from .client import AptoPlay, AptosClient, ErrorKind, GoogleProfileClient, StatisticUpdate, StatisticVersion
from .config import ClientConfig, ConfigurationError
from .normalization import AptoPlayError, OpaqueCause, TransportFault, normalize_error, normalize_keys

__version__ = "0.3.0"

__all__ = [
    "AptoPlay",
    "AptosClient",
    "GoogleProfileClient",
    "ClientConfig",
    "ErrorKind",
    "StatisticUpdate",
    "StatisticVersion",
    "AptoPlayError",
    "TransportFault",
    "OpaqueCause",
    "ConfigurationError",
    "normalize_error",
    "normalize_keys",
]
