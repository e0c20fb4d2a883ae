"""RBAC Admin CLI tool (rbac-admin)."""

import typer

app = typer.Typer(name="rbac-admin", help="RBAC Admin CLI")
db_app = typer.Typer(help="Database management commands")
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init():
    """Create tables and seed default data on first run."""
    from rbac_admin.db.init_db import init_db

    init_db(seed=True)
    typer.echo("✅ Database initialised")


@db_app.command("seed")
def db_seed():
    """Insert any missing default roles, permissions and the admin user."""
    from rbac_admin.db.session import SessionLocal
    from rbac_admin.db.init_db import create_tables
    from rbac_admin.db.seeds import seed_all

    create_tables()
    db = SessionLocal()
    try:
        seed_all(db, force=True)
    finally:
        db.close()
    typer.echo("✅ All seeds applied")


@db_app.command("reset")
def db_reset():
    """Drop and recreate every table, then reseed (DANGER)."""
    confirm = typer.confirm("⚠️  This will DROP all tables. Continue?")
    if not confirm:
        raise typer.Abort()
    from rbac_admin.db.init_db import drop_tables, init_db

    drop_tables()
    init_db(seed=True)
    typer.echo("✅ Database reset")


@app.command("login")
def login(
    username: str = typer.Option(..., prompt=True, help="Username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
    base_url: str = typer.Option("http://localhost:8080", help="API base URL"),
):
    """Log in against a running server and print the token."""
    import httpx

    resp = httpx.post(
        f"{base_url}/api/auth/login",
        json={"username": username, "password": password},
        timeout=10,
    )
    body = resp.json()
    if body.get("code") != 200:
        typer.echo(f"❌ {body.get('msg')}", err=True)
        raise typer.Exit(code=1)
    typer.echo(body["data"]["token"])


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8080, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("rbac_admin.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
