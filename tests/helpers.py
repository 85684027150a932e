from dataclasses import dataclass
from enum import Enum, auto

from delimcodec.core.models.scalars import Float32, Int, Short


class EngineType(Enum):
    GASOLINE = auto()
    DIESEL = auto()
    HYBRID = auto()
    ELECTRIC = auto()


@dataclass(frozen=True)
class CarOption:
    option: str | None = None
    price: float = 0.0


@dataclass
class Car:
    model: str | None = None
    power: Int | None = None
    engine_type: EngineType | None = None
    used: bool = False
    options: set[CarOption] | None = None
    mileage: dict[str | None, float | None] | None = None


@dataclass
class Address:
    street: str | None = None
    number: Short | None = None


@dataclass
class Owner:
    name: str | None = None
    address: Address | None = None
    tags: list[str] | None = None


@dataclass
class Garage:
    name: str | None = None
    owner: Owner | None = None
    fleet: dict[str, Owner | None] | None = None
    ratings: list[int] | None = None
    zones: frozenset[str] | None = None
    history: tuple[Float32, ...] | None = None
    levels: dict[EngineType, Int] | None = None


@dataclass
class Node:
    label: str | None = None
    next: "Node | None" = None


@dataclass
class Tree:
    label: str | None = None
    children: "list[Tree] | None" = None


class NoDefaults:
    pass


@dataclass
class Mandatory:
    name: str


def make_car() -> Car:
    return Car(
        model="Volvo XC60",
        power=190,
        engine_type=EngineType.DIESEL,
        used=True,
        options={
            CarOption("Navi pack", 1200.50),
            CarOption("Safety pack", 755.25),
        },
        mileage={"2017": 133.5, "2018": 4113.5, "2019": 727.8},
    )


def make_garage() -> Garage:
    return Garage(
        name="North",
        owner=Owner(
            name="Alice",
            address=Address(street="Main street", number=12),
            tags=["vip", "fleet"],
        ),
        fleet={
            "bob": Owner(name="Bob", address=Address(street="Elm", number=3)),
            "carol": Owner(name="Carol"),
            "dave": None,
        },
        ratings=[5, 3, 5],
        zones=frozenset({"A", "B"}),
        history=(1.5, -2.25),
        levels={EngineType.HYBRID: 2, EngineType.ELECTRIC: 7},
    )
