"""FastAPI server — HTTP surface for the EV vs gas cost calculator.

Run with:
    uvicorn evgas_calculator.api.server:app --reload --port 8000

Or:
    python -m evgas_calculator.api.server

Endpoints:
    GET  /inputs/defaults  — default CalculatorInputs as JSON
    GET  /schema           — JSON Schema for CalculatorInputs
    GET  /presets          — EV and gas vehicle presets
    POST /calculate        — all horizons + comparison summary
    GET  /parity           — break-even electricity rate
    POST /parity/curve     — parity summary + break-even line
    GET  /prices           — prices for a ZIP (tiered fallback, cached)
    GET  /prices/national  — national average gas prices
    GET  /reverse-geocode  — coordinates → ZIP
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from evgas_calculator.config.inputs import CalculatorInputs
from evgas_calculator.config.presets import EV_PRESETS, GAS_PRESETS, VehiclePreset
from evgas_calculator.config.settings import get_settings
from evgas_calculator.engine.breakeven import build_parity_curve, compute_parity_summary
from evgas_calculator.engine.cost import compute_all_scenarios, electricity_parity_rate
from evgas_calculator.engine.summary import summarize
from evgas_calculator.logging_setup import setup_logging
from evgas_calculator.models.prices import (
    ALL_PRICE_KINDS,
    PriceKind,
    PriceLookupResult,
    PriceResult,
)
from evgas_calculator.models.results import (
    CalculationResults,
    ComparisonSummary,
    HorizonKey,
    ParityPoint,
    ParitySummary,
    StrategyKey,
)
from evgas_calculator.pricing.resolver import PriceResolver
from evgas_calculator.pricing.validation import (
    CoordinateValidationError,
    ZipCodeValidationError,
)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.resolver = PriceResolver(settings)
    try:
        yield
    finally:
        await app.state.resolver.aclose()


app = FastAPI(
    title="EV vs Gas Cost Calculator API",
    version="1.0",
    description=(
        "Compare electric-vehicle and gas-vehicle running costs across "
        "daily, weekly, monthly and yearly horizons, and look up regional "
        "electricity, gas and fast-charging prices by ZIP code."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_resolver(request: Request) -> PriceResolver:
    return request.app.state.resolver


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CalculateRequest(BaseModel):
    """Request body for /calculate. All fields optional — defaults used for missing."""
    inputs: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full CalculatorInputs JSON. Missing fields use defaults. "
                    "Example: {'ev_efficiency': 4.2, 'home_electricity_price': 0.22}",
    )
    horizon: HorizonKey = Field(default="yearly", description="Horizon for the summary")
    baseline: StrategyKey = Field(
        default="gas_regular",
        description="Strategy the cheapest option is compared against",
    )


class CalculateResponse(BaseModel):
    """Response from /calculate."""
    results: CalculationResults
    summary: ComparisonSummary


class ParityResponse(BaseModel):
    gas_price: float
    gas_efficiency: float
    ev_efficiency: float
    parity_rate: float


class ParityCurveRequest(BaseModel):
    inputs: dict[str, Any] = Field(default_factory=dict)
    steps: int = Field(default=24, ge=1, le=500)


class ParityCurveResponse(BaseModel):
    summary: ParitySummary
    curve: list[ParityPoint]


class PresetsResponse(BaseModel):
    ev: list[VehiclePreset]
    gas: list[VehiclePreset]


class ReverseGeocodeResponse(BaseModel):
    zip_code: str


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_inputs(overrides: dict[str, Any]) -> CalculatorInputs:
    """Build CalculatorInputs from partial overrides merged onto defaults."""
    defaults = CalculatorInputs().model_dump()
    defaults.update(overrides)
    try:
        return CalculatorInputs(**defaults)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to the docs."""
    return {
        "name": "EV vs Gas Cost Calculator API",
        "version": "1.0",
        "docs": "GET /docs (interactive Swagger UI)",
        "start_here": "POST /calculate",
    }


@app.get("/schema")
def get_schema():
    """JSON Schema for CalculatorInputs — types, defaults, constraints."""
    return CalculatorInputs.model_json_schema()


@app.get("/inputs/defaults")
def get_defaults():
    """Default CalculatorInputs. Use as a starting point for modifications."""
    return CalculatorInputs().model_dump()


@app.get("/presets", response_model=PresetsResponse)
def get_presets():
    """EPA-rated presets for pre-filling the efficiency inputs."""
    return PresetsResponse(ev=EV_PRESETS, gas=GAS_PRESETS)


@app.post("/calculate", response_model=CalculateResponse)
def calculate(req: CalculateRequest):
    """Cost every strategy over every horizon.

    Example minimal request:
    ```json
    {"inputs": {"ev_efficiency": 4.2, "regular_gas_price": 3.89}}
    ```
    """
    inputs = _build_inputs(req.inputs)
    results = compute_all_scenarios(inputs)
    return CalculateResponse(
        results=results,
        summary=summarize(results, horizon=req.horizon, baseline=req.baseline),
    )


@app.get("/parity", response_model=ParityResponse)
def parity(
    gas_price: float = Query(ge=0, description="$/gal"),
    gas_efficiency: float = Query(ge=0, description="mpg"),
    ev_efficiency: float = Query(ge=0, description="mi/kWh"),
):
    """Electricity price at which the EV matches gas per mile."""
    return ParityResponse(
        gas_price=gas_price,
        gas_efficiency=gas_efficiency,
        ev_efficiency=ev_efficiency,
        parity_rate=electricity_parity_rate(gas_price, gas_efficiency, ev_efficiency),
    )


@app.post("/parity/curve", response_model=ParityCurveResponse)
def parity_curve(req: ParityCurveRequest):
    """Parity rates, per-mile margins, and the break-even line."""
    inputs = _build_inputs(req.inputs)
    return ParityCurveResponse(
        summary=compute_parity_summary(inputs),
        curve=build_parity_curve(inputs, steps=req.steps),
    )


@app.get("/prices", response_model=PriceLookupResult)
async def prices(
    zip_code: str = Query(alias="zip", description="5-digit ZIP, optionally ZIP+4"),
    kinds: list[PriceKind] = Query(default=list(ALL_PRICE_KINDS)),
    resolver: PriceResolver = Depends(get_resolver),
):
    """Resolve prices for a ZIP. Only a malformed ZIP is an error."""
    try:
        return await resolver.lookup(zip_code, kinds)
    except ZipCodeValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/prices/national", response_model=PriceResult)
async def national_prices(resolver: PriceResolver = Depends(get_resolver)):
    """National average gas prices (AAA, else the fallback constant)."""
    return await resolver.national_gas_prices()


@app.get("/reverse-geocode", response_model=ReverseGeocodeResponse)
async def reverse_geocode_endpoint(
    lat: float = Query(description="Latitude"),
    lon: float = Query(description="Longitude"),
    resolver: PriceResolver = Depends(get_resolver),
):
    """Map browser coordinates to a ZIP for the next price lookup."""
    try:
        zip_code = await resolver.zip_from_coordinates(lat, lon)
    except CoordinateValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if zip_code is None:
        raise HTTPException(status_code=404, detail="ZIP code not found for this location")
    return ReverseGeocodeResponse(zip_code=zip_code)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "evgas_calculator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
