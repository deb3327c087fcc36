def test_smoke():
    """
    Smoke test mínimo do repositório.

    Valida que o pacote pode ser importado e expõe a API pública
    principal. Não valida comportamento de domínio.
    """
    import seqflow

    for name in ("action", "transformation", "make", "run", "result"):
        assert hasattr(seqflow, name)
    assert seqflow.__version__
