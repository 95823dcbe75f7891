from __future__ import annotations

import json
import logging
import time
from typing import List, Optional

import typer

from ..core.config import Config
from ..core.errors import ConfigError
from ..core.store import Store

app = typer.Typer(help="hotconf CLI")


def _config(
    names: List[str],
    config_dir: str,
    config_type: str,
    env: bool = False,
    env_prefix: str = "",
) -> Config:
    return Config(
        config_dir,
        *names,
        default_config_type=config_type,
        automatic_env=env,
        env_prefix=env_prefix,
    )


def _dumps(value: object) -> str:
    return json.dumps(value, indent=2, default=str)


def _load(cfg: Config) -> None:
    try:
        cfg.load()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def get(
    key: str,
    names: List[str] = typer.Argument(..., help="Config names, e.g. app or log.toml"),
    config_dir: str = typer.Option(".", "--dir"),
    config_type: str = typer.Option("yaml", "--type"),
    env: bool = typer.Option(False, "--env", help="Let environment variables override values"),
    env_prefix: str = typer.Option("", "--env-prefix"),
):
    cfg = _config(names, config_dir, config_type, env, env_prefix)
    _load(cfg)
    typer.echo(_dumps({"key": key, "value": cfg.get(key), "set": cfg.is_set(key)}))


@app.command()
def dump(
    names: List[str] = typer.Argument(...),
    config_dir: str = typer.Option(".", "--dir"),
    config_type: str = typer.Option("yaml", "--type"),
):
    cfg = _config(names, config_dir, config_type)
    _load(cfg)
    typer.echo(_dumps(cfg.all_settings()))


@app.command()
def sources(
    names: List[str] = typer.Argument(...),
    config_dir: str = typer.Option(".", "--dir"),
    config_type: str = typer.Option("yaml", "--type"),
):
    cfg = _config(names, config_dir, config_type)
    typer.echo(_dumps([
        {"name": sd.name, "type": sd.type, "file": sd.file}
        for sd in cfg.sources
    ]))


@app.command()
def watch(
    names: List[str] = typer.Argument(...),
    config_dir: str = typer.Option(".", "--dir"),
    config_type: str = typer.Option("yaml", "--type"),
    webhook: Optional[str] = typer.Option(None, "--webhook", help="Feishu bot webhook for reload failures"),
):
    cfg = _config(names, config_dir, config_type)

    def report(name: str, err: Optional[Exception]) -> None:
        typer.echo(f"[{name}] {err}", err=True)

    cfg.register_notification(report)
    if webhook:
        from ..notifications.feishu import FeishuBotHook

        cfg.register_notification(FeishuBotHook(webhook))

    for sd in cfg.sources:
        def echo(store: Store, name: str = sd.name) -> None:
            typer.echo(_dumps({name: store.all_settings()}))

        cfg.on_change(sd.name, echo)

    _load(cfg)
    cfg.watch()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        cfg.close()


if __name__ == "__main__":
    app()
