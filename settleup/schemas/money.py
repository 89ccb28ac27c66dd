from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

from settleup.core.utils import qround

# Amounts keep full precision in memory and are reported in cents.
Money = Annotated[
    Decimal,
    PlainSerializer(lambda d: str(qround(d)), return_type=str, when_used="json"),
]
