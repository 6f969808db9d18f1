from typing import List, Optional


class GenerationError(Exception):
    """Базовая ошибка генерации TypeScript кода"""


class TypeModelError(GenerationError):
    """Некорректное описание модели типов"""

    def __init__(self, message: str, type_name: Optional[str] = None):
        self.message = message
        self.type_name = type_name
        super().__init__(f"{type_name}: {message}" if type_name else message)


class RouteResolutionError(GenerationError):
    """Для действия контроллера не удалось определить маршрут"""

    def __init__(self, controller: str, action: str):
        self.controller = controller
        self.action = action
        super().__init__(
            f"Could not determine the route for api controller action {controller}.{action}"
        )


class AmbiguousBodyParameterError(GenerationError):
    """У действия контроллера несколько кандидатов на тело запроса"""

    def __init__(self, controller: str, action: str, candidates: List[str]):
        self.controller = controller
        self.action = action
        self.candidates = candidates
        super().__init__(
            f"Ambiguous request body for api controller action {controller}.{action}: "
            + ", ".join(candidates)
        )
