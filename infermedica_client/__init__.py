# infermedica_client/__init__.py
__all__ = [
    "InfermedicaApi",
    "ClientConfig",
    "Evidence",
    "RequestDescriptor",
    "InfermedicaError",
    "InvalidRequestError",
    "InfermedicaAPIError",
    "__version__",
]

__version__ = "0.1.0"

from importlib.metadata import version, PackageNotFoundError

try:                      # If installed as a package
    __version__ = version("infermedica-client")
except PackageNotFoundError:
    pass

from .api import InfermedicaApi  # noqa: E402
from .exceptions import InfermedicaAPIError, InfermedicaError, InvalidRequestError  # noqa: E402
from .models import ClientConfig, Evidence, RequestDescriptor  # noqa: E402
