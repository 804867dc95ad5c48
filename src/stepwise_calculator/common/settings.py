"""Calculator configuration."""
import sys
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CalculatorSettings(BaseModel):
    """
    Tunables shared by the calculator stages.

    The defaults reproduce the classic console behaviour: results within
    machine epsilon of an integer print without decimals, anything else
    prints with 15 decimals (the number of significant digits a double holds).
    """

    # Settings must not change while an expression is being evaluated
    model_config = ConfigDict(frozen=True)

    precision: int = Field(default=15, ge=0, le=30, description="Decimals used for non-integral results")
    epsilon: float = Field(default=sys.float_info.epsilon, gt=0, description="Fractional part below which a result is integral")
    max_expression_length: int = Field(default=255, ge=1, description="Longest accepted expression")
    log_level: LogLevel = Field(default="WARNING", description="Package logger level")
