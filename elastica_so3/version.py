import importlib.metadata

try:
    VERSION = importlib.metadata.version("pyelastica-so3")
except importlib.metadata.PackageNotFoundError:
    VERSION = "unknown"
