"""
API request models for the rental fairness endpoint.

JSON keys are camelCase; `squareFeet` is accepted as an alias of
`areaUnits`. Range and positivity checks are left to the domain models so
that every validation failure produces the same error shape.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from fairness import (
    ComparableProperty,
    EvaluationRequest,
    LocationDetails,
    MarketData,
    Metrics,
    PropertyDetails,
    ValidationError,
)


class LocationDetailsInput(BaseModel):
    """Resolved address and coordinates."""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    lat: float = 0.0
    lng: float = 0.0

    def to_domain(self) -> LocationDetails:
        return LocationDetails(
            street=self.street,
            city=self.city,
            state=self.state,
            zip=self.zip,
            lat=self.lat,
            lng=self.lng,
        )


class PropertyDetailsInput(BaseModel):
    """Subject property as posted by the client."""
    model_config = ConfigDict(populate_by_name=True)

    rent: Optional[float] = None
    area_units: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("areaUnits", "squareFeet", "area_units"),
    )
    bedrooms: int = 0
    bathrooms: float = 0
    location: str = ""
    location_details: Optional[LocationDetailsInput] = Field(default=None, alias="locationDetails")
    amenities: List[str] = []
    condition: Optional[str] = ""

    def to_domain(self) -> PropertyDetails:
        return PropertyDetails(
            rent=self.rent,
            area_units=self.area_units,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            location=self.location,
            location_details=self.location_details.to_domain() if self.location_details else None,
            amenities=list(self.amenities),
            condition=self.condition or "",
        )


class MetricsInput(BaseModel):
    """Importance weights (0-100 each)."""
    model_config = ConfigDict(populate_by_name=True)

    location_importance: float = Field(alias="locationImportance")
    condition_importance: float = Field(alias="conditionImportance")
    size_importance: float = Field(alias="sizeImportance")
    amenities_importance: float = Field(alias="amenitiesImportance")
    market_rate_importance: float = Field(alias="marketRateImportance")

    def to_domain(self) -> Metrics:
        return Metrics(
            location_importance=self.location_importance,
            condition_importance=self.condition_importance,
            size_importance=self.size_importance,
            amenities_importance=self.amenities_importance,
            market_rate_importance=self.market_rate_importance,
        )


class ComparablePropertyInput(BaseModel):
    """A caller-supplied comparable."""
    model_config = ConfigDict(populate_by_name=True)

    rent: Optional[float] = None
    area_units: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("areaUnits", "squareFeet", "area_units"),
    )
    bedrooms: int = 0
    bathrooms: float = 0
    distance: Optional[float] = None
    address: Optional[str] = None

    def to_domain(self) -> ComparableProperty:
        return ComparableProperty(
            rent=self.rent,
            area_units=self.area_units,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            distance=self.distance,
            address=self.address,
        )


class MarketDataInput(BaseModel):
    """Caller-supplied market summary."""
    model_config = ConfigDict(populate_by_name=True)

    average_rent: float = Field(default=0.0, alias="averageRent")
    comparable_properties: List[ComparablePropertyInput] = Field(
        default=[],
        alias="comparableProperties",
    )

    def to_domain(self) -> MarketData:
        return MarketData(
            average_rent=self.average_rent,
            comparable_properties=[c.to_domain() for c in self.comparable_properties],
        )


class RentalFairnessRequest(BaseModel):
    """Request body for a fairness evaluation."""
    model_config = ConfigDict(populate_by_name=True)

    property_details: Optional[PropertyDetailsInput] = Field(default=None, alias="propertyDetails")
    metrics: Optional[MetricsInput] = None
    market_data: Optional[MarketDataInput] = Field(default=None, alias="marketData")

    def to_domain(self) -> EvaluationRequest:
        """
        Convert to the engine's request.

        Raises:
            ValidationError: Required sections missing or invalid values
        """
        if self.property_details is None or self.metrics is None:
            raise ValidationError("Missing required parameters: propertyDetails or metrics")
        return EvaluationRequest(
            property_details=self.property_details.to_domain(),
            metrics=self.metrics.to_domain(),
            market_data=self.market_data.to_domain() if self.market_data else None,
        )
