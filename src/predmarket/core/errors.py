"""
Market Errors — иерархия ошибок ценообразования

Каждый вид ошибки — отдельный класс, чтобы внешняя граница могла различать их
без разбора текста сообщения. Частичных результатов не бывает: вызов либо
полностью успешен, либо завершается одной из этих ошибок.
"""


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MarketError(Exception):
    """Базовая ошибка движка ценообразования."""


class InvalidOutcomeIndex(MarketError):
    """
    Индекс исхода вне диапазона [0, num_outcomes).

    Возникает как для ставки (bet.option_id), так и для запроса цены.
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Invalid outcome index: {index}")


class InvalidLiquidity(MarketError):
    """liquidity_param не конечен, не положителен или не представим в Decimal-контексте."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid liquidity parameter: {reason}")


class CalculationError(MarketError):
    """Переполнение при суммировании или деление на ноль при нормализации."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Calculation error: {reason}")


class InsufficientData(MarketError):
    """Конфигурация рынка с числом исходов меньше двух."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Insufficient data: {reason}")
