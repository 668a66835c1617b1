from .cache import QueryCache
from .dispatcher import Dispatcher
from .routes import ROUTES, IdSegment, LiteralSegment, Route, RouteMatch, WildcardSegment, match_route
from .transport import HttpTransport, TransportError
