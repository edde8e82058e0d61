__version__ = "0.3.1"

# Replaced by the release build with the commit hash the wheel was cut from.
__version_hash__ = "dev"
