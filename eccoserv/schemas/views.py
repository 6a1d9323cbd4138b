"""
EccoServ - Composite Views
Visões desnormalizadas ("WithDetails") montadas pelo RelationshipResolver
"""
from pydantic import Field
from typing import List, Optional

from .user import UserOut, ClientOut, ProviderOut
from .well import WellOut
from .visit import VisitOut, ScheduledVisitOut
from .invoice import InvoiceOut
from .material import MaterialUsageOut


class ClientWithUser(ClientOut):
    user: UserOut


class ProviderWithUser(ProviderOut):
    user: UserOut


class UserWithProfile(UserOut):
    client: Optional[ClientOut] = None
    provider: Optional[ProviderOut] = None


class WellWithClient(WellOut):
    client: ClientWithUser


class VisitWithDetails(VisitOut):
    well: WellWithClient
    provider: ProviderWithUser


class VisitWithMaterials(VisitWithDetails):
    materials: List[MaterialUsageOut] = Field(default_factory=list)


class ScheduledVisitWithDetails(ScheduledVisitOut):
    well: WellWithClient
    provider: ProviderWithUser


class InvoiceWithDetails(InvoiceOut):
    client: ClientWithUser
    provider: ProviderWithUser
    visit: VisitWithDetails
