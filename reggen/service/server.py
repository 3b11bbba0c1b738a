from ..config import Settings
from ..registers.codegen import RegisterHGenerator, RegisterCGenerator, RegisterTexGenerator
from ..render.pdf import PdfRenderer, PdfRenderError
from ..utils.logger import get_logger
from .schema import DeviceRequest

from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, HTTPServer
import json
import typing

from pydantic import ValidationError

log = get_logger(__name__)



@dataclass
class Artifact:
    ext: str
    content_type: str
    """ turns a validated request into the file contents """
    build: "typing.Callable[[DeviceRequest, Settings], bytes]"
    """ the PDF keeps the device name as typed, the sources use the lower-case name they #include """
    filename: "typing.Callable[[str], str]"


@dataclass
class Response:
    status: int
    body: bytes = b''
    headers: "dict[str,str]" = field(default_factory=dict)

    @staticmethod
    def error(status: int, message: str, **headers) -> "Response":
        body = json.dumps({'error': message}).encode('utf-8')
        return Response(status, body, {'Content-Type': 'application/json', **headers})



def _build_header(req: DeviceRequest, settings: Settings) -> bytes:
    return RegisterHGenerator(req.to_device()).get_header().encode('utf-8')


def _build_body(req: DeviceRequest, settings: Settings) -> bytes:
    return RegisterCGenerator(req.to_device()).get_code().encode('utf-8')


def _build_tex(req: DeviceRequest, settings: Settings) -> bytes:
    return RegisterTexGenerator(req.to_device()).get_tex().encode('utf-8')


def _build_pdf(req: DeviceRequest, settings: Settings) -> bytes:
    tex = RegisterTexGenerator(req.to_device()).get_tex()
    return PdfRenderer(settings).render(tex, req.device_name)


ROUTES = {
    '/api/generate-pdf': Artifact('pdf', 'application/pdf', _build_pdf, lambda name: f'{name}_registers.pdf'),
    '/api/generate-header': Artifact('h', 'text/plain; charset=utf-8', _build_header, lambda name: f'{name.lower()}_registers.h'),
    '/api/generate-body': Artifact('c', 'text/plain; charset=utf-8', _build_body, lambda name: f'{name.lower()}_registers.c'),
    '/api/generate-tex': Artifact('tex', 'application/x-latex', _build_tex, lambda name: f'{name.lower()}_registers.tex'),
}



def handle_generate(path: str, method: str, body: bytes, settings: Settings) -> Response:
    """Maps one request to a response; never raises"""

    artifact = ROUTES.get(path.split('?', 1)[0])
    if artifact is None:
        return Response.error(404, 'Not Found')

    if method != 'POST':
        return Response.error(405, 'Method Not Allowed', Allow='POST')

    try:
        req = DeviceRequest.model_validate(json.loads(body or b'null'))
    except (ValueError, ValidationError) as e:
        log.info('Rejected request to %s: %s', path, e)
        return Response.error(400, 'Missing required parameters')

    try:
        content = artifact.build(req, settings)
    except PdfRenderError as e:
        log.error('Generating %s for %s failed: %s', artifact.ext, req.device_name, e)
        return Response.error(500, f'Generating the {artifact.ext.upper()} failed')
    except Exception:
        log.exception('Generating %s for %s failed', artifact.ext, req.device_name)
        return Response.error(500, f'Generating the {artifact.ext.upper()} failed')

    return Response(200, content, {
        'Content-Type': artifact.content_type,
        'Content-Disposition': f'attachment; filename="{artifact.filename(req.device_name)}"',
    })



class RegisterRequestHandler(BaseHTTPRequestHandler):

    settings: Settings = Settings()

    server_version = 'reggen'


    def _dispatch(self):
        length = int(self.headers.get('Content-Length') or 0)
        body = self.rfile.read(length) if length > 0 else b''

        response = handle_generate(self.path, self.command, body, self.settings)

        self.send_response(response.status)
        for key, value in response.headers.items():
            self.send_header(key, value)
        self.send_header('Content-Length', str(len(response.body)))
        self.end_headers()
        self.wfile.write(response.body)

    do_POST = _dispatch
    do_GET = _dispatch
    do_PUT = _dispatch
    do_DELETE = _dispatch


    def log_message(self, format, *args):
        log.info('%s - %s', self.address_string(), format % args)



def make_server(settings: Settings) -> HTTPServer:
    handler = type('ConfiguredRequestHandler', (RegisterRequestHandler,), {'settings': settings})
    return HTTPServer((settings.host, settings.port), handler)


def serve(settings: Settings):
    httpd = make_server(settings)
    host, port = httpd.server_address[:2]
    log.info('Serving on http://%s:%d', host, port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        log.info('Shutting down')
    finally:
        httpd.server_close()
