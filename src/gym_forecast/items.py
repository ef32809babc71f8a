"""Consumable item catalog: candies, energy items and drug/booster constants."""

from __future__ import annotations

from dataclasses import dataclass

ENERGY_PER_XANAX = 250
JUMP_ENERGY = 1150
DVD_HAPPY = 2500
DVD_HAPPY_ADULT_NOVELTIES = 5000
GREEN_EGG_ENERGY = 500
SEASONAL_MAIL_ENERGY = 250
LOGO_CLICK_ENERGY = 50
POINTS_PER_REFILL = 30
FEATHERY_HOTEL_COUPON = 367


@dataclass(frozen=True)
class Candy:
    item_id: int
    name: str
    happy: int


@dataclass(frozen=True)
class EnergyItem:
    """``energy`` is None for items that refill a full bar."""

    item_id: int
    name: str
    energy: int | None


CANDIES: dict[int, Candy] = {
    310: Candy(310, "25 happy candy", 25),
    36: Candy(36, "35 happy candy", 35),
    528: Candy(528, "75 happy candy", 75),
    529: Candy(529, "100 happy candy", 100),
    151: Candy(151, "150 happy candy", 150),
}

ENERGY_ITEMS: dict[int, EnergyItem] = {
    985: EnergyItem(985, "Small Energy Drink", 5),
    986: EnergyItem(986, "Energy Drink", 10),
    987: EnergyItem(987, "Large Energy Drink", 15),
    530: EnergyItem(530, "X-Large Energy Drink", 20),
    532: EnergyItem(532, "XX-Large Energy Drink", 25),
    533: EnergyItem(533, "XXX-Large Energy Drink", 30),
    FEATHERY_HOTEL_COUPON: EnergyItem(FEATHERY_HOTEL_COUPON, "Feathery Hotel Coupon", None),
}


def energy_item_energy(item_id: int, quantity: int, faction_percent: float, max_energy: int) -> float:
    """Energy gained from ``quantity`` energy items, faction boost included."""
    item = ENERGY_ITEMS[item_id]
    per_item = max_energy if item.energy is None else item.energy
    return per_item * quantity * (1 + faction_percent / 100)
