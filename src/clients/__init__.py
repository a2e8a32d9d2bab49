"""HTTP clients for the upstream fuel price providers."""

from clients.errors import PriceSourceError, SourceMalformed, SourceRejected, SourceUnreachable
from clients.national_average import NationalAverage, NationalAverageClient
from clients.tankerkoenig import StationDetail, StationRecord, TankerkoenigClient

__all__ = [
    "NationalAverage",
    "NationalAverageClient",
    "PriceSourceError",
    "SourceMalformed",
    "SourceRejected",
    "SourceUnreachable",
    "StationDetail",
    "StationRecord",
    "TankerkoenigClient",
]
