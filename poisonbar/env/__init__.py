from .gym_env import PoisonBarEnv

__all__ = ["PoisonBarEnv"]
