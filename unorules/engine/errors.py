"""Rule-violation errors raised by the engine."""


class UnoError(Exception):
    """Base exception for rule violations."""

    code = "UNO_ERROR"

    def __init__(self, message: str, code: str | None = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


# ============ Setup ============

class InvalidConfigurationError(UnoError):
    code = "INVALID_CONFIGURATION"


class InsufficientPlayersError(InvalidConfigurationError):
    code = "INSUFFICIENT_PLAYERS"


class UnknownPlayerError(UnoError):
    code = "UNKNOWN_PLAYER"

    def __init__(self, player: int):
        self.player = player
        super().__init__(f"No player at index {player}")


# ============ Turn and play ============

class InvalidTurnError(UnoError):
    code = "INVALID_TURN"


class IllegalPlayError(UnoError):
    code = "ILLEGAL_PLAY"


class MissingColorError(IllegalPlayError):
    code = "MISSING_COLOR"


class InvalidCardIndexError(IllegalPlayError):
    code = "INVALID_CARD_INDEX"

    def __init__(self, card_index: int, hand_size: int):
        self.card_index = card_index
        super().__init__(f"Card index {card_index} out of range (hand has {hand_size} cards)")


class AlreadyDrewError(UnoError):
    code = "ALREADY_DREW"


class MustDrawError(UnoError):
    code = "MUST_DRAW"


# ============ UNO calls ============

class UnoAlreadyCalledError(UnoError):
    code = "UNO_ALREADY_CALLED"


class NoUnoFailureError(UnoError):
    code = "NO_UNO_FAILURE"


# ============ Piles ============

class NotEnoughCardsError(UnoError):
    code = "NOT_ENOUGH_CARDS"

    def __init__(self, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(f"Need {needed} cards but only {available} can be drawn")


class EmptyDiscardPileError(UnoError):
    code = "EMPTY_DISCARD_PILE"


# ============ Game ============

class NoCurrentHandError(UnoError):
    code = "NO_CURRENT_HAND"


class EndedWithoutWinnerError(UnoError):
    code = "ENDED_WITHOUT_WINNER"
