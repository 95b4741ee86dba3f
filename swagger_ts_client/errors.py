class GeneratorError(Exception):
    """Базовая ошибка генератора"""


class ConfigurationError(GeneratorError, ValueError):
    """Не хватает обязательной настройки"""


class SchemaFetchError(GeneratorError):
    """Не удалось получить Swagger документ"""

    def __init__(self, message, source=None):
        self.message = message
        self.source = source
        super().__init__(message)
