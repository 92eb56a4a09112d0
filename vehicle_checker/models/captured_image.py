from dataclasses import dataclass


@dataclass(frozen=True)
class CapturedImage:
    """ An encoded image and its mime type """

    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)
