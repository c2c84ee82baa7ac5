"""Nutrient profile arithmetic."""

from collections.abc import Iterable
from dataclasses import dataclass

PROTEIN_KCAL_PER_G = 4.0
FAT_KCAL_PER_G = 9.0
CARBS_KCAL_PER_G = 4.0


@dataclass(frozen=True)
class MacroEnergy:
    """Energy contributed by each macronutrient, in kcal."""

    protein_kcal: float
    fat_kcal: float
    carbs_kcal: float


@dataclass(frozen=True)
class NutrientProfile:
    """Absolute or per-100g amounts of tracked nutrients.

    Optional nutrients default to zero so profiles coming from sources that
    only know the four macros still add up with richer ones.
    """

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    alcohol_g: float = 0.0
    caffeine_mg: float = 0.0

    @classmethod
    def zero(cls) -> "NutrientProfile":
        """Return the additive identity."""
        return cls(0.0, 0.0, 0.0, 0.0)

    def scale(self, factor: float) -> "NutrientProfile":
        """Multiply every nutrient by a weight ratio."""
        return NutrientProfile(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            fat_g=self.fat_g * factor,
            carbs_g=self.carbs_g * factor,
            fiber_g=self.fiber_g * factor,
            sugar_g=self.sugar_g * factor,
            alcohol_g=self.alcohol_g * factor,
            caffeine_mg=self.caffeine_mg * factor,
        )

    def __add__(self, other: object) -> "NutrientProfile":
        if not isinstance(other, NutrientProfile):
            return NotImplemented
        return NutrientProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            fat_g=self.fat_g + other.fat_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fiber_g=self.fiber_g + other.fiber_g,
            sugar_g=self.sugar_g + other.sugar_g,
            alcohol_g=self.alcohol_g + other.alcohol_g,
            caffeine_mg=self.caffeine_mg + other.caffeine_mg,
        )

    def energy_split(self) -> MacroEnergy:
        """Return kcal coming from protein, fat and carbs."""
        return MacroEnergy(
            protein_kcal=self.protein_g * PROTEIN_KCAL_PER_G,
            fat_kcal=self.fat_g * FAT_KCAL_PER_G,
            carbs_kcal=self.carbs_g * CARBS_KCAL_PER_G,
        )


def sum_profiles(profiles: Iterable[NutrientProfile]) -> NutrientProfile:
    """Fold profiles left to right, starting from zero."""
    total = NutrientProfile.zero()
    for profile in profiles:
        total = total + profile
    return total
