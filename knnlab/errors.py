# knnlab/errors.py


class KNNLabError(Exception):
    """Base class for errors raised by knnlab itself."""


class InvalidOptionsError(KNNLabError, ValueError):
    """Bad cross-validation options (fold count, neighbour grid, metric...)."""


class UnknownDatasetError(KNNLabError, KeyError):
    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable
        return str(self.args[0]) if self.args else ""


class DatasetDownloadError(KNNLabError):
    """A public dataset could not be fetched over HTTP."""
