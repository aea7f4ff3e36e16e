from sqlalchemy import text

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

def fetch_rows(app):
    with app.state.engine.connect() as conn:
        return [dict(r) for r in conn.execute(text("SELECT * FROM contact_form ORDER BY id")).mappings()]
