"""Domain-specific exception classes."""


class PotionShopError(Exception):
    """Base exception for potion shop errors."""

    pass


class PotionNotFoundError(PotionShopError):
    """Raised when a potion order cannot be found."""

    def __init__(self, potion_id: str):
        self.potion_id = potion_id
        super().__init__(f"Potion with ID {potion_id} not found")

