from pathlib import Path
import json

from .config import Settings
from .registers.codegen import RegisterHGenerator, RegisterCGenerator, RegisterTexGenerator, RegisterGraphGenerator
from .registers.structure.types import Device
from .registers.tools import registers_filename
from .render.pdf import PdfRenderer
from .service.schema import DeviceRequest
from .service.server import serve
from .utils.logger import get_logger, setup_logging

log = get_logger(__name__)


def load_device(path: Path) -> Device:
    """Reads a JSON descriptor in the same shape the HTTP service accepts"""
    with open(path, 'r', encoding='utf-8') as fp:
        data = json.load(fp)
    return DeviceRequest.model_validate(data).to_device()


def run_generate(
    descriptor: Path,
    output_dir: Path,
    pdf: bool,
    graph: "Path|None",
    settings: Settings,
) -> "list[Path]":

    device = load_device(descriptor)
    log.info('Device %s: %d registers, %d bit, base %s', device.name, len(device.registers), device.bit_width, device.base_address)

    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    h = RegisterHGenerator(device)
    c = RegisterCGenerator(device)
    tex = RegisterTexGenerator(device)
    for gen in (h, c, tex):
        path = output_dir / gen.get_filename()
        gen.save(str(path))
        written.append(path)

    if pdf:
        path = output_dir / registers_filename(device.name, 'pdf')
        path.write_bytes(PdfRenderer(settings).render(tex.get_tex(), device.name))
        written.append(path)

    if graph is not None:
        # a .gv/.dot target is written as source, anything else is rendered by graphviz
        render = graph.suffix.lower() not in ('.gv', '.dot')
        RegisterGraphGenerator(device).save(str(graph), render=render)
        written.append(graph)

    for path in written:
        log.info('Wrote %s', path)
    return written


def run_app(args) -> int:
    settings = Settings.from_env().override(
        host=getattr(args, 'host', None),
        port=getattr(args, 'port', None),
        latex_binary=getattr(args, 'latex', None),
        log_level=args.log_level,
    )
    setup_logging(level=settings.log_level, quiet=args.quiet)

    if args.command == 'generate':
        try:
            run_generate(args.descriptor, args.output, args.pdf, args.graph, settings)
        except Exception as e:
            log.error('Generation failed: %s', e)
            log.debug('Details', exc_info=True)
            return 1
        return 0

    if args.command == 'serve':
        serve(settings)
        return 0

    raise ValueError(f'Unknown command: {args.command}')
