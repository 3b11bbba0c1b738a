from .pdf import PdfRenderer, PdfRenderError, latex_workspace
