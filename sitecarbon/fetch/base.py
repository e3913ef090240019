from dataclasses import dataclass

@dataclass(frozen=True)
class FetchResult:
    url: str
    byte_length: int
    elapsed_millis: float  # informational only

    def __post_init__(self):
        if self.byte_length < 0:
            raise ValueError("byte_length must be non-negative")
        if self.elapsed_millis < 0:
            raise ValueError("elapsed_millis must be non-negative")

    @property
    def kilobytes(self) -> float:
        return self.byte_length / 1024

class BaseFetcher:
    async def fetch(self, url: str) -> FetchResult:
        raise NotImplementedError
