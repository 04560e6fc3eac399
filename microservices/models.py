import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict


def generate_id() -> str:
    """Short random identifier for orders."""
    return uuid.uuid4().hex[:13]


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Order:
    id: str
    user_id: str
    product: Any
    quantity: Any
    total: Any

    def to_dict(self) -> Dict[str, Any]:
        # Wire format uses camelCase userId
        return {
            "id": self.id,
            "userId": self.user_id,
            "product": self.product,
            "quantity": self.quantity,
            "total": self.total,
        }
