from dataclasses import dataclass


@dataclass(frozen=True)
class ParseError:
    line: int
    message: str

    def to_dict(self) -> dict:
        return {"line": self.line, "message": self.message}
