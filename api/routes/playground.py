"""
Playground routes — what-if AQI prediction.
"""
from fastapi import APIRouter
from pydantic import BaseModel, Field

from pipeline.classification.classifier import category_of
from pipeline.scoring.predictor import DEFAULT_INPUT, ScoringInput, factor_breakdown, predict

router = APIRouter()


class PredictRequest(BaseModel):
    temperature: float = Field(DEFAULT_INPUT.temperature, ge=0, le=45)
    humidity: float = Field(DEFAULT_INPUT.humidity, ge=0, le=100)
    wind_speed: float = Field(DEFAULT_INPUT.wind_speed, ge=0, le=20)
    traffic_index: float = Field(DEFAULT_INPUT.traffic_index, ge=0, le=100)
    industrial_score: float = Field(DEFAULT_INPUT.industrial_score, ge=0, le=100)
    construction_activity: float = Field(DEFAULT_INPUT.construction_activity, ge=0, le=100)
    green_cover: float = Field(DEFAULT_INPUT.green_cover, ge=0, le=100)
    population_density: float = Field(DEFAULT_INPUT.population_density, ge=0, le=100)
    time_of_day: float = Field(DEFAULT_INPUT.time_of_day, ge=0, le=23)
    season: int = Field(DEFAULT_INPUT.season, ge=0, le=3)


@router.get("/predict/defaults")
def predict_defaults():
    """Default input vector shown when the playground opens or resets."""
    return DEFAULT_INPUT.to_dict()


@router.post("/predict")
def predict_aqi(body: PredictRequest):
    """Predict an AQI for the given variables and classify it."""
    variables = ScoringInput(**body.model_dump())
    aqi = predict(variables)
    category = category_of(aqi)
    return {
        "aqi": aqi,
        "category": category.label,
        "color": category.color,
        "factors": factor_breakdown(variables),
    }
