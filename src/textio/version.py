from importlib.metadata import PackageNotFoundError, version

try:
    version = version("TextIO")
except PackageNotFoundError:
    version = "0.0.0"
