import io

import pandas as pd

from material_supermarket.models.history import ADGI_DONE
from material_supermarket.utils.excel import XLSX_MIMETYPE


def test_pages_require_login(client):
    for url in ["/materials/", "/dashboard/", "/history/", "/adgi/", "/excel/"]:
        resp = client.get(url)
        assert resp.status_code == 302
        assert "/auth/login" in resp.headers["Location"]


def test_root_redirects_to_materials_when_logged_in(auth_client):
    resp = auth_client.get("/")
    assert resp.status_code == 302
    assert "/materials/" in resp.headers["Location"]


def test_material_list_and_search(auth_client):
    resp = auth_client.get("/materials/")
    assert resp.status_code == 200
    assert b"X/A013604BA" in resp.data

    resp = auth_client.get("/materials/?q=vinyl")
    assert b"VINYL CABLE 6MM2 G" in resp.data
    assert b"X/A013604BA" not in resp.data


def test_take_records_current_user(auth_client, app, app_store):
    resp = auth_client.post(
        "/materials/2005436/take",
        data={"bin_number": "1", "quantity": "30"},
        follow_redirects=True,
    )
    assert resp.status_code == 200
    assert "Se tomaron 30".encode() in resp.data

    assert app_store.find_material("2005436").bin1 == 70
    entry = app_store.history[0]
    assert entry.user == app.config["OWNER_USERNAME"]
    assert entry.action == "take"


def test_take_material_id_with_slash(auth_client, app_store):
    auth_client.post("/materials/X/G005320AB/take", data={"bin_number": "2", "quantity": "5"})
    assert app_store.find_material("X/G005320AB").bin2 == 380


def test_take_insufficient_stock_flashes_error(auth_client, app_store):
    resp = auth_client.post(
        "/materials/X/A013604BA/take",
        data={"bin_number": "1", "quantity": "1"},
        follow_redirects=True,
    )
    assert "Stock insuficiente".encode() in resp.data
    assert len(app_store.ledger) == 0


def test_fill_and_capacity_exceeded(auth_client, app_store):
    auth_client.post("/materials/X/A013604BA/fill", data={"bin_number": "3", "quantity": "8"})
    assert app_store.find_material("X/A013604BA").bin3 == 8

    resp = auth_client.post(
        "/materials/X/A013604BA/fill",
        data={"bin_number": "3", "quantity": "1"},
        follow_redirects=True,
    )
    assert "Capacidad del BIN 3".encode() in resp.data
    assert app_store.find_material("X/A013604BA").bin3 == 8
    assert len(app_store.ledger) == 1


def test_invalid_form_values(auth_client, app_store):
    resp = auth_client.post(
        "/materials/X/A013604BA/fill",
        data={"bin_number": "9", "quantity": "1"},
        follow_redirects=True,
    )
    assert "BIN inválido".encode() in resp.data

    resp = auth_client.post(
        "/materials/X/A013604BA/fill",
        data={"bin_number": "1", "quantity": "abc"},
        follow_redirects=True,
    )
    assert "Cantidad inválida".encode() in resp.data
    assert len(app_store.ledger) == 0


def test_unknown_material_flashes_error(auth_client):
    resp = auth_client.post(
        "/materials/NOPE/take",
        data={"bin_number": "1", "quantity": "1"},
        follow_redirects=True,
    )
    assert "Material no encontrado".encode() in resp.data


def test_dashboard_renders(auth_client):
    auth_client.post("/materials/2005481/take", data={"bin_number": "4", "quantity": "10"})
    resp = auth_client.get("/dashboard/")
    assert resp.status_code == 200
    assert "Materiales críticos".encode() in resp.data
    assert b"2005481" in resp.data


def test_history_filters(auth_client):
    auth_client.post(
        "/materials/2005481/take", data={"bin_number": "4", "quantity": "10"}, follow_redirects=True
    )
    auth_client.post(
        "/materials/X/A013604BA/fill", data={"bin_number": "1", "quantity": "2"}, follow_redirects=True
    )

    resp = auth_client.get("/history/?action=fill")
    assert b"X/A013604BA" in resp.data
    assert b"SCHOEN Y 2.5-4" not in resp.data
    assert b"action-take" not in resp.data

    resp = auth_client.get("/history/?q=schoen&sort=oldest")
    assert b"SCHOEN Y 2.5-4" in resp.data


def test_adgi_bulk_update(auth_client, app_store):
    auth_client.post("/materials/2005481/take", data={"bin_number": "1", "quantity": "10"})
    auth_client.post("/materials/2005481/take", data={"bin_number": "2", "quantity": "5"})

    resp = auth_client.get("/adgi/")
    assert b"2005481" in resp.data

    resp = auth_client.post("/adgi/2005481/status", data={"status": "done"}, follow_redirects=True)
    assert "2 movimientos".encode() in resp.data
    assert all(e.adgi.status == ADGI_DONE for e in app_store.ledger.take_entries("2005481"))

    resp = auth_client.post("/adgi/2005481/status", data={"status": "bogus"}, follow_redirects=True)
    assert "Estado ADGI inválido".encode() in resp.data


def test_exports_are_xlsx(auth_client):
    for url in ["/excel/export", "/excel/live", "/excel/template"]:
        resp = auth_client.get(url)
        assert resp.status_code == 200
        assert resp.mimetype == XLSX_MIMETYPE
        sheets = pd.read_excel(io.BytesIO(resp.data), sheet_name=None)
        assert sheets


def test_import_replaces_materials(auth_client, app_store):
    auth_client.post("/materials/2005481/take", data={"bin_number": "1", "quantity": "10"})

    df = pd.DataFrame({"ID": ["NEW-1"], "Description": ["Nuevo"], "Capacity per bin": [5], "Bin1": [5]})
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:
        df.to_excel(writer, sheet_name="Material Stock", index=False)
    buffer.seek(0)

    resp = auth_client.post(
        "/excel/import",
        data={"file": (buffer, "stock.xlsx")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )
    assert "1 materiales importados".encode() in resp.data
    assert [m.id for m in app_store.materials] == ["NEW-1"]
    assert len(app_store.ledger) == 1


def test_import_rejects_bad_files(auth_client, app_store):
    resp = auth_client.post(
        "/excel/import",
        data={"file": (io.BytesIO(b"a,b"), "stock.csv")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )
    assert "Formato no permitido".encode() in resp.data

    resp = auth_client.post(
        "/excel/import",
        data={"file": (io.BytesIO(b"basura"), "stock.xlsx")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )
    assert "No se pudo leer".encode() in resp.data
    assert len(app_store.materials) == 27


def test_auto_sync_toggle_and_live_file(auth_client, app, app_store):
    assert app_store.auto_sync is False

    auth_client.post("/excel/auto-sync")
    assert app_store.auto_sync is True

    auth_client.post("/materials/2005481/take", data={"bin_number": "1", "quantity": "10"})
    assert app_store.sync_hook.sync_count == 1

    resp = auth_client.get("/excel/")
    assert resp.status_code == 200
    assert "Sincronizaciones: 1".encode() in resp.data
