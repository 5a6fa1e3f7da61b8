"""Vehicle presets — EPA combined ratings used to pre-fill efficiency inputs."""

from pydantic import BaseModel, Field


class VehiclePreset(BaseModel):
    """One catalogued vehicle and its combined efficiency rating."""

    name: str
    efficiency: float = Field(gt=0, description="mi/kWh for EVs, mpg for gas vehicles")
    description: str = ""


def _preset(name: str, efficiency: float, unit: str) -> VehiclePreset:
    return VehiclePreset(
        name=name,
        efficiency=efficiency,
        description=f"EPA rated {efficiency:g} {unit} combined",
    )


EV_PRESETS: list[VehiclePreset] = [
    _preset("Tesla Model 3", 4.2, "mi/kWh"),
    _preset("Tesla Model Y", 3.8, "mi/kWh"),
    _preset("Chevy Bolt EV", 4.0, "mi/kWh"),
    _preset("Nissan Leaf", 3.8, "mi/kWh"),
    _preset("Ford Mach-E", 3.5, "mi/kWh"),
    _preset("Hyundai IONIQ 5", 3.6, "mi/kWh"),
    _preset("Kia EV6", 3.6, "mi/kWh"),
    _preset("Rivian R1T", 2.8, "mi/kWh"),
]

GAS_PRESETS: list[VehiclePreset] = [
    _preset("Toyota Prius", 56, "mpg"),
    _preset("Honda Civic", 35, "mpg"),
    _preset("Toyota Camry", 32, "mpg"),
    _preset("Ford F-150", 22, "mpg"),
    _preset("BMW 3 Series", 30, "mpg"),
    _preset("Honda Accord", 33, "mpg"),
    _preset("Toyota RAV4", 30, "mpg"),
    _preset("Chevy Silverado", 20, "mpg"),
]


def find_preset(name: str) -> VehiclePreset | None:
    """Case-insensitive lookup across both preset lists."""
    wanted = name.strip().lower()
    for preset in EV_PRESETS + GAS_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None
