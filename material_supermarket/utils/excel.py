import io
import logging
import math
import unicodedata
from datetime import datetime

import pandas as pd

from ..errors import ImportParseError
from ..models.material import Material, BIN_NUMBERS

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

FECHA_FMT = "%d/%m/%Y %H:%M:%S"

# =====================================================================================
#                                   NORMALIZACIÓN
# =====================================================================================

EQUIVALENCIAS = {
    # ID del material
    "id": "id",
    "id sap": "id",
    "idsap": "id",
    "material id": "id",
    "materialid": "id",
    "id material": "id",
    "codigo": "id",
    "codigo del material": "id",

    # Descripción
    "description": "description",
    "deskripsi": "description",
    "deskripsi material": "description",
    "descripcion": "description",
    "texto breve de material": "description",

    # Capacidad por bin
    "capacity per bin": "qty_per_bin",
    "capacity": "qty_per_bin",
    "qty per bin": "qty_per_bin",
    "qtyperbin": "qty_per_bin",
    "kapasitas per bin": "qty_per_bin",
    "kapasitas bin": "qty_per_bin",

    # Bins
    "bin1": "bin1", "bin 1": "bin1",
    "bin2": "bin2", "bin 2": "bin2",
    "bin3": "bin3", "bin 3": "bin3",
    "bin4": "bin4", "bin 4": "bin4",
}

NUMERIC_FIELDS = ["qty_per_bin"] + [f"bin{n}" for n in BIN_NUMBERS]

SHEET_KEYWORDS = ("material", "stock", "template")
HEADER_SCAN_ROWS = 10


def limpiar(texto) -> str:
    """Limpia y normaliza encabezados para comparaciones flexibles."""
    if texto is None:
        return ""

    texto = str(texto).strip()
    texto = unicodedata.normalize("NFKD", texto).encode("ascii", "ignore").decode()
    texto = texto.lower()

    for r in ["-", "_", ".", ",", ";", "/", "\ufeff", "\u200b"]:
        texto = texto.replace(r, " ")

    return " ".join(texto.split())


def mapear_columnas(headers):
    """{posición: campo} para los encabezados reconocidos."""
    mapeadas = {}
    for pos, col in enumerate(headers):
        campo = EQUIVALENCIAS.get(limpiar(col))
        if campo and campo not in mapeadas.values():
            mapeadas[pos] = campo
    return mapeadas


# =====================================================================================
#                                   IMPORTACIÓN
# =====================================================================================

def pick_material_sheet(sheet_names):
    """Primera hoja cuyo nombre contiene material / stock / template."""
    for name in sheet_names:
        lower = str(name).lower()
        if any(k in lower for k in SHEET_KEYWORDS):
            return name
    return None


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return str(value).strip() == ""


def _to_text(value):
    if _is_blank(value):
        return ""
    # Excel devuelve 2005372.0 en columnas con vacíos
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _to_int(value):
    if _is_blank(value):
        return 0
    try:
        return int(float(str(value).replace(",", "")))
    except (ValueError, OverflowError):
        return 0


def _find_header_row(raw: pd.DataFrame):
    """La plantilla trae filas de título antes del encabezado real."""
    for idx in range(min(HEADER_SCAN_ROWS, len(raw))):
        mapeadas = mapear_columnas(list(raw.iloc[idx]))
        if "id" in mapeadas.values():
            return idx, mapeadas
    return None, {}


def parse_materials_frame(raw: pd.DataFrame):
    """Convierte una hoja leída sin encabezado (header=None) en materiales."""
    header_idx, columnas = _find_header_row(raw)
    if header_idx is None:
        raise ImportParseError("La hoja de materiales no contiene la columna ID.")

    materiales = []
    vistos = set()

    for _, row in raw.iloc[header_idx + 1:].iterrows():
        data = {campo: row.iloc[pos] for pos, campo in columnas.items()}

        material_id = _to_text(data.get("id"))
        if not material_id:
            continue

        if material_id in vistos:
            logger.warning("ID duplicado en Excel, se conserva el primero: %s", material_id)
            continue

        qty_per_bin = _to_int(data.get("qty_per_bin"))
        if qty_per_bin <= 0:
            logger.warning("Material %s sin capacidad por bin válida, se omite", material_id)
            continue

        bins = {}
        for n in BIN_NUMBERS:
            valor = _to_int(data.get(f"bin{n}"))
            bins[f"bin{n}"] = min(max(valor, 0), qty_per_bin)
            if bins[f"bin{n}"] != valor:
                logger.warning("BIN %s de %s ajustado: %s -> %s", n, material_id, valor, bins[f"bin{n}"])

        materiales.append(
            Material(
                id=material_id,
                description=_to_text(data.get("description")),
                qty_per_bin=qty_per_bin,
                **bins,
            )
        )
        vistos.add(material_id)

    if not materiales:
        raise ImportParseError("No hay datos de material válidos para importar.")

    return materiales


def load_materials_excel(file_storage):
    """Carga materiales desde un Excel (archivo subido, stream o ruta)."""
    stream = getattr(file_storage, "stream", file_storage)

    try:
        sheets = pd.read_excel(stream, sheet_name=None, header=None)
    except Exception:
        raise ImportParseError("No se pudo leer el archivo Excel. Verifique el formato.")

    sheet_name = pick_material_sheet(sheets.keys())
    if sheet_name is None:
        raise ImportParseError("No se encontró la hoja de materiales en el archivo Excel.")

    materiales = parse_materials_frame(sheets[sheet_name])
    logger.info("Importados %s materiales desde la hoja '%s'", len(materiales), sheet_name)
    return materiales


# =====================================================================================
#                               DATAFRAMES DE EXPORTACIÓN
# =====================================================================================

MATERIAL_COLUMNS = [
    "ID", "Description", "Capacity per bin", "Bin1", "Bin2", "Bin3", "Bin4",
    "Total", "Status", "Last Update",
]

HISTORY_COLUMNS = [
    "Time", "MaterialID", "Description", "Action", "Bin", "Quantity", "User",
    "ADGI Status", "Transaction ID",
]


def materials_frame(materials, now=None):
    now = (now or datetime.now()).strftime(FECHA_FMT)
    filas = [
        [
            m.id, m.description, m.qty_per_bin, m.bin1, m.bin2, m.bin3, m.bin4,
            m.total_stock, m.status, now,
        ]
        for m in materials
    ]
    return pd.DataFrame(filas, columns=MATERIAL_COLUMNS)


def history_frame(history):
    filas = [
        [
            h.timestamp.strftime(FECHA_FMT),
            h.material_id,
            h.material_description,
            h.action.upper(),
            h.bin_number,
            h.quantity,
            h.user,
            h.adgi.status if h.is_take else "",
            h.id,
        ]
        for h in history
    ]
    return pd.DataFrame(filas, columns=HISTORY_COLUMNS)


# =====================================================================================
#                           GENERADOR DE EXCEL PROFESIONAL
# =====================================================================================

def _formatos(book):
    return {
        "header": book.add_format({
            "bold": True,
            "bg_color": "#1F4E78",
            "font_color": "white",
            "border": 1,
            "align": "center",
            "valign": "vcenter",
        }),
        "title": book.add_format({"bold": True, "font_size": 14, "font_color": "#1F4E78"}),
        "available": book.add_format({"bg_color": "#D9EAD3", "border": 1, "align": "center"}),
        "empty": book.add_format({"bg_color": "#F4CCCC", "border": 1, "align": "center"}),
    }


def _autoajustar(ws, df, startrow=0):
    for i, colname in enumerate(df.columns):
        largos = df[colname].astype(str).map(len)
        max_len = max(int(largos.max()) if len(largos) else 0, len(str(colname))) + 2
        ws.set_column(i, i, max_len)
    ws.freeze_panes(startrow + 1, 0)


def _write_sheet(writer, df, sheet_name, formatos, startrow=0):
    df.to_excel(writer, sheet_name=sheet_name, index=False, startrow=startrow)
    ws = writer.sheets[sheet_name]

    for col, name in enumerate(df.columns):
        ws.write(startrow, col, name, formatos["header"])

    _autoajustar(ws, df, startrow)

    # Colorear estado de stock
    if "Status" in df.columns:
        est_col = df.columns.get_loc("Status")
        for row, estado in enumerate(df["Status"], start=startrow + 1):
            fmt = formatos["available"] if str(estado).lower() == "available" else formatos["empty"]
            ws.write(row, est_col, estado, fmt)

    return ws


def export_snapshot(materials, history, now=None) -> io.BytesIO:
    """Exportación completa: hoja de stock + historial completo."""
    output = io.BytesIO()

    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        formatos = _formatos(writer.book)
        _write_sheet(writer, materials_frame(materials, now), "Material Stock", formatos)
        _write_sheet(writer, history_frame(history), "History", formatos)

    output.seek(0)
    return output


def export_live_snapshot(materials, history, recent_limit=50, now=None) -> io.BytesIO:
    """Snapshot para auto-sync: stock + últimos movimientos."""
    output = io.BytesIO()

    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        formatos = _formatos(writer.book)
        _write_sheet(writer, materials_frame(materials, now), "Live Stock", formatos)
        _write_sheet(writer, history_frame(list(history)[:recent_limit]), "Recent Activity", formatos)

    output.seek(0)
    return output


def create_template(materials, auto_sync_enabled=False, now=None) -> io.BytesIO:
    """Plantilla con filas de título encima del encabezado; se puede reimportar."""
    now = now or datetime.now()
    output = io.BytesIO()
    startrow = 5

    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        formatos = _formatos(writer.book)
        ws = _write_sheet(writer, materials_frame(materials, now), "Material Template", formatos, startrow)

        ws.write(0, 0, "SISTEMA DE GESTIÓN MATERIAL SUPERMARKET", formatos["title"])
        ws.write(1, 0, "Plantilla de actualización y monitoreo")
        ws.write(2, 0, "Generado:")
        ws.write(2, 1, now.strftime(FECHA_FMT))
        ws.write(3, 0, "Auto-Sync: " + ("ACTIVO" if auto_sync_enabled else "INACTIVO"))

    output.seek(0)
    return output


def export_filename(prefix, now=None):
    now = now or datetime.now()
    return f"{prefix}_{now.strftime('%Y-%m-%dT%H-%M-%S')}.xlsx"
