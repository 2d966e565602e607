# paint_queue/schema.py
DDL = """
CREATE TABLE IF NOT EXISTS orders (
    transaction_id    TEXT PRIMARY KEY,
    customer_name     TEXT NOT NULL,
    client_contact    TEXT NOT NULL,
    paint_type        TEXT NOT NULL,
    colour_code       TEXT NOT NULL DEFAULT 'Pending',
    category          TEXT NOT NULL,
    order_type        TEXT NOT NULL DEFAULT 'Order',
    po_type           TEXT,
    paint_quantity    TEXT,
    assigned_employee TEXT,
    current_status    TEXT NOT NULL DEFAULT 'Waiting',
    note              TEXT,
    archived          BOOLEAN NOT NULL DEFAULT FALSE,
    deleted           BOOLEAN NOT NULL DEFAULT FALSE,
    start_time        TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    completed_at      TIMESTAMPTZ
);

CREATE INDEX IF NOT EXISTS orders_live_status_idx ON orders (current_status, start_time DESC)
    WHERE deleted = FALSE;

CREATE TABLE IF NOT EXISTS status_history (
    history_id     SERIAL PRIMARY KEY,
    transaction_id TEXT NOT NULL REFERENCES orders (transaction_id),
    status         TEXT NOT NULL,
    entered_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS status_history_order_idx ON status_history (transaction_id, entered_at);

CREATE TABLE IF NOT EXISTS audit_logs (
    log_id        SERIAL PRIMARY KEY,
    order_id      TEXT NOT NULL,
    action        TEXT NOT NULL,
    from_status   TEXT,
    to_status     TEXT,
    employee_name TEXT,
    user_role     TEXT,
    colour_code   TEXT,
    remarks       TEXT,
    timestamp     TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS audit_logs_timestamp_idx ON audit_logs (timestamp DESC);

CREATE TABLE IF NOT EXISTS deleted_orders (
    transaction_id    TEXT PRIMARY KEY,
    customer_name     TEXT,
    client_contact    TEXT,
    paint_type        TEXT,
    colour_code       TEXT,
    category          TEXT,
    order_type        TEXT,
    po_type           TEXT,
    paint_quantity    TEXT,
    assigned_employee TEXT,
    current_status    TEXT,
    note              TEXT,
    start_time        TIMESTAMPTZ,
    completed_at      TIMESTAMPTZ,
    deleted_by        TEXT,
    deleted_at        TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS employees (
    employee_id   SERIAL PRIMARY KEY,
    employee_code TEXT NOT NULL UNIQUE,
    employee_name TEXT NOT NULL,
    role          TEXT
);

CREATE TABLE IF NOT EXISTS admin_logs (
    log_id       SERIAL PRIMARY KEY,
    order_id     TEXT NOT NULL,
    action       TEXT NOT NULL,
    performed_by TEXT,
    user_role    TEXT,
    timestamp    TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""
