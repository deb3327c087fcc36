# tests/core/config/test_config_loader.py
"""
Testes do carregador de configuração (load_config / load_run_options).

Os testes asseguram que:
- o arquivo defaults é obrigatório
- o arquivo local é opcional e atua apenas como override
- formatos não suportados e raízes inválidas são rejeitados
- a seção `engine` é convertida em `RunOptions`

Decisões arquiteturais:
    - A configuração é declarativa e baseada em arquivos
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - A configuração final é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro
"""

from pathlib import Path

import pytest

try:
    from seqflow.core.config import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
        load_config,
        load_run_options,
        run_options_from_config,
    )
    from seqflow.core.engine import BindingPrecedence, RunOptions
    from seqflow.core.errors import RunOptionsError
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando o loader ou suas exceções tipadas não podem ser importados."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config modules. Implement:\n"
            "- src/seqflow/core/config/loader.py (load_config, load_run_options)\n"
            "- src/seqflow/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _write(path: Path, text: str) -> str:
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_missing_defaults_raises(tmp_path: Path):
    """
    Verifica que a ausência do arquivo defaults é tratada como erro fatal.

    O override local nunca substitui o defaults ausente.
    """
    _require_imports()
    local = _write(tmp_path / "local.yaml", "engine:\n  allow_async_args: true\n")

    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(tmp_path / "missing.yaml"), local_path=local)


def test_local_is_optional(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", "engine:\n  allow_async_args: false\n")

    cfg = load_config(defaults_path=defaults, local_path=str(tmp_path / "absent.yaml"))

    assert cfg == {"engine": {"allow_async_args": False}}


def test_local_overrides_defaults(tmp_path: Path):
    """
    Verifica que o arquivo local sobrescreve apenas as chaves que declara.
    """
    _require_imports()
    defaults = _write(
        tmp_path / "defaults.yaml",
        "engine:\n  allow_async_args: false\n  binding_precedence: step-bindings\n",
    )
    local = _write(tmp_path / "local.yml", "engine:\n  allow_async_args: true\n")

    cfg = load_config(defaults_path=defaults, local_path=local)

    assert cfg["engine"] == {"allow_async_args": True, "binding_precedence": "step-bindings"}


def test_json_is_supported(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.json", '{"engine": {"binding_precedence": "args"}}')

    assert load_config(defaults_path=defaults) == {"engine": {"binding_precedence": "args"}}


def test_empty_file_is_empty_config(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", "")

    assert load_config(defaults_path=defaults) == {}
    assert load_run_options(defaults_path=defaults) == RunOptions()


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.toml", "[engine]\n")

    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=defaults)


def test_non_dict_root_raises(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", "- just\n- a list\n")

    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=defaults)


def test_load_run_options(tmp_path: Path):
    """
    Verifica a conversão da seção `engine` em `RunOptions` tipadas.
    """
    _require_imports()
    defaults = _write(
        tmp_path / "defaults.yaml",
        "engine:\n  allow_async_args: true\n  binding_precedence: args\nother:\n  ignored: 1\n",
    )

    opts = load_run_options(defaults_path=defaults)

    assert opts.allow_async_args is True
    assert opts.binding_precedence == BindingPrecedence.ARGS
    assert opts.schemas is None


def test_engine_section_must_be_a_dict():
    _require_imports()
    with pytest.raises(InvalidConfigRootTypeError):
        run_options_from_config({"engine": ["allow_async_args"]})


def test_unknown_engine_keys_are_rejected():
    _require_imports()
    with pytest.raises(RunOptionsError):
        run_options_from_config({"engine": {"retries": 3}})
