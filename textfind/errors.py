class InvalidArgumentError(ValueError):
    """调用方传入了不合法的参数（例如空关键字），属于调用约定错误，不会被吞掉"""
