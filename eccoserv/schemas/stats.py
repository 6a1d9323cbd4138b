"""
EccoServ - Dashboard Stats Schema
"""
from pydantic import Field
from typing import Dict

from .base import CamelModel, Money


class DashboardStats(CamelModel):
    total_clients: int
    total_providers: int
    total_wells: int
    monthly_visits: int
    invoices_by_status: Dict[str, int] = Field(default_factory=dict)
    outstanding_amount: Money
