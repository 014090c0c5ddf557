from .rng import SeededRandom, seed_from_string, time_seed

__all__ = ["SeededRandom", "seed_from_string", "time_seed"]
