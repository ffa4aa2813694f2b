SERVICE_NAME = "quotator-crawler"
__version__ = "1.0.0"
