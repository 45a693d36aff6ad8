"""Environment configuration classes"""
from .settings import config, Config, DevelopmentConfig, ProductionConfig, TestingConfig

__all__ = [
    'config',
    'Config',
    'DevelopmentConfig',
    'ProductionConfig',
    'TestingConfig',
]
