from minio_operate.logger.logger import get_logger, init_logger

__all__ = ['get_logger', 'init_logger']
