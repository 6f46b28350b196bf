from .gym_env import PyramidEnv

__all__ = ["PyramidEnv"]
