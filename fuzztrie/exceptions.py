class MissingArgumentError(TypeError):
    """An error indicating that a required argument of an index operation was None"""

    def __init__(self, name):
        super().__init__(f'argument {name!r} must not be None')
        self.name = name
