from .schema import DeviceRequest, FieldSection, SpareSection, RegisterModel
from .server import handle_generate, make_server, serve, Response, ROUTES
