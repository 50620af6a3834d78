"""Catalog asset schemas.

An asset is a discriminated union over three variants keyed by
``asset_type``: Policy, Claim and Model. Consumers switch on the
discriminant rather than on class hierarchy.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from asset_catalog.utils.timestamps import parse_iso_timestamp


class AssetType(str, Enum):
    """Asset variant discriminant."""
    POLICY = "Policy"
    CLAIM = "Claim"
    MODEL = "Model"


class RegTag(str, Enum):
    """Data-protection regime an asset falls under."""
    GDPR = "GDPR"
    HIPAA = "HIPAA"
    CCPA = "CCPA"
    NONE = "None"


class ClaimStatus(str, Enum):
    """Processing status of a claim."""
    NEW = "New"
    IN_REVIEW = "In Review"
    PAID = "Paid"


def _clean_name(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("name must not be empty")
    return cleaned


def _check_timestamp(value: Optional[str]) -> Optional[str]:
    if value is not None and parse_iso_timestamp(value) is None:
        raise ValueError(f"'{value}' is not an ISO-8601 timestamp")
    return value


# Stored assets

class AssetBase(BaseModel):
    """Fields shared by every asset variant."""

    id: str = Field(..., description="Store-generated identifier, unique across the catalog")
    name: str = Field(..., min_length=1, description="Display name")
    description: Optional[str] = Field(None, description="Free-text description")
    owner_id: str = Field(..., description="Identifier of the user who created the asset")
    creation_date: str = Field(..., description="ISO-8601 creation timestamp, immutable")
    pii_tag: bool = Field(default=False, description="Asset contains personally identifiable information")
    reg_tag: RegTag = Field(default=RegTag.NONE, description="Regulatory tag")

    model_config = ConfigDict(from_attributes=True)


class PolicyAsset(AssetBase):
    """An insurance policy record."""

    asset_type: Literal["Policy"] = "Policy"
    data_type: Literal["Record"] = "Record"


class ClaimAsset(AssetBase):
    """A claim filed against one policy."""

    asset_type: Literal["Claim"] = "Claim"
    claim_amount: float = Field(..., ge=0, description="Claimed amount")
    status: ClaimStatus = Field(default=ClaimStatus.NEW, description="Claim status")
    policy_id: str = Field(..., description="Identifier of the policy this claim is filed against")


class ModelAsset(AssetBase):
    """A model result derived from a set of claims."""

    asset_type: Literal["Model"] = "Model"
    data_type: Literal["Result"] = "Result"
    source_claim_ids: List[str] = Field(
        default_factory=list, description="Identifiers of the claims the model was derived from"
    )


Asset = Annotated[Union[PolicyAsset, ClaimAsset, ModelAsset], Field(discriminator="asset_type")]

asset_adapter: TypeAdapter[Asset] = TypeAdapter(Asset)


# Write payloads

class AssetCreateBase(BaseModel):
    """Fields a client supplies when creating any asset."""

    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(None, description="Free-text description")
    pii_tag: bool = Field(default=False, description="Contains PII")
    reg_tag: RegTag = Field(default=RegTag.NONE, description="Regulatory tag")
    creation_date: Optional[str] = Field(
        None, description="Client-stamped ISO-8601 creation time; the server stamps it when omitted"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("creation_date")
    @classmethod
    def validate_creation_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_timestamp(value)


class PolicyCreate(AssetCreateBase):
    asset_type: Literal["Policy"] = "Policy"


class ClaimCreate(AssetCreateBase):
    asset_type: Literal["Claim"] = "Claim"
    claim_amount: float = Field(..., ge=0)
    status: ClaimStatus = ClaimStatus.NEW
    policy_id: str = Field(..., min_length=1)


class ModelCreate(AssetCreateBase):
    asset_type: Literal["Model"] = "Model"
    source_claim_ids: List[str] = Field(default_factory=list)


AssetCreate = Annotated[
    Union[PolicyCreate, ClaimCreate, ModelCreate], Field(discriminator="asset_type")
]


class AssetUpdate(BaseModel):
    """Partial update payload.

    ``asset_type`` may be echoed back but never changed. Claim and Model
    fields are only applied to assets of the matching variant.
    """

    asset_type: Optional[AssetType] = None
    name: Optional[str] = None
    description: Optional[str] = None
    pii_tag: Optional[bool] = None
    reg_tag: Optional[RegTag] = None
    claim_amount: Optional[float] = Field(None, ge=0)
    status: Optional[ClaimStatus] = None
    policy_id: Optional[str] = None
    source_claim_ids: Optional[List[str]] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _clean_name(value)


VARIANT_FIELDS = {
    AssetType.POLICY: frozenset(),
    AssetType.CLAIM: frozenset({"claim_amount", "status", "policy_id"}),
    AssetType.MODEL: frozenset({"source_claim_ids"}),
}

COMMON_UPDATE_FIELDS = frozenset({"name", "description", "pii_tag", "reg_tag"})


class CatalogFilter(BaseModel):
    """Catalog list filters; ``None`` means no filter on that field."""

    search: Optional[str] = None
    asset_type: Optional[AssetType] = None
    reg_tag: Optional[RegTag] = None

    def matches(self, asset: Asset) -> bool:
        """Check whether an asset passes every active filter."""
        if self.search and self.search.lower() not in asset.name.lower():
            return False
        if self.asset_type is not None and asset.asset_type != self.asset_type.value:
            return False
        if self.reg_tag is not None and asset.reg_tag != self.reg_tag:
            return False
        return True


class AssetListResponse(BaseModel):
    total: int
    assets: List[Asset]
