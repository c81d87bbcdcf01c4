from dataclasses import dataclass
from typing import Optional


@dataclass
class Transaction:
    id: str
    type: str               # 'income' | 'expense'
    date: str               # 'YYYY-MM-DD'
    amount: float
    category: str = "Other"
    account: str = ""
    notes: str = ""
    recurring: bool = False
    frequency: Optional[str] = None   # 'monthly' when recurring
