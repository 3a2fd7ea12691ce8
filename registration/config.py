import os


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-prod')
    TESTING = False

    # Single operator account
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', '12345')
    ADMIN_DISPLAY_NAME = os.getenv('ADMIN_DISPLAY_NAME', 'Admin')

    # Sessions
    SESSION_IDLE_MINUTES = int(os.getenv('SESSION_IDLE_MINUTES', '30'))
    SESSION_BACKEND = os.getenv('SESSION_BACKEND', 'memory')

    # Redis (only used by the redis session backend)
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    SESSION_BACKEND = 'memory'


class ProductionConfig(Config):
    DEBUG = False
    SESSION_BACKEND = os.getenv('SESSION_BACKEND', 'redis')


class TestingConfig(Config):
    DEBUG = False
    TESTING = True
    SESSION_BACKEND = 'memory'
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = '12345'
    ADMIN_DISPLAY_NAME = 'Admin'
    SESSION_IDLE_MINUTES = 30


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
