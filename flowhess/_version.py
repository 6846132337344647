import importlib.metadata

try:
    __version__ = importlib.metadata.version("flowhess")
except importlib.metadata.PackageNotFoundError:
    # running from a source checkout that was never installed
    __version__ = "0.1.0"
