"""
Controller Base Class

Provides the framework controller type that gates controller registration.
"""


class Controller:
    """
    Base Controller class.

    Only subclasses of this class are admitted by RoutingConfiguration.
    Route-bearing methods are discovered by the route compiler, not here.

    Example:
        class UsersController(Controller):
            def index(self):
                ...

        configuration.add_controller(UsersController)
    """
