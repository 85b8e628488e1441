from dataclasses import dataclass

@dataclass(frozen=True)
class SessionDTO:
    token: str
    username: str

    def __repr__(self) -> str:
        return f"SessionDTO(username={self.username!r}, token=***)"
