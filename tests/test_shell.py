import io

import pytest

from simfs.disk import TOTAL_BLOCKS, blocks_needed
from simfs.shell import ExitRequested, Shell
from simfs.tree import DataType, NodeKind, User


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def shell(out):
    return Shell(out=out)


def take(out):
    value = out.getvalue()
    out.seek(0)
    out.truncate()
    return value


def child_names(node):
    return [n.meta.name for n in node.iter_children()]


def test_disk_initialised_message():
    buffer = io.StringIO()
    fresh = Shell(out=buffer)
    assert fresh.disk.free_blocks == TOTAL_BLOCKS
    assert "Disco simulado inicializado: 1000 blocos de 32 bytes cada" in buffer.getvalue()


def test_mkdir_and_ls(out, shell):
    shell.execute("touch b.txt")
    shell.execute("mkdir a")
    shell.execute("touch c")
    take(out)
    shell.execute("ls")
    assert take(out) == "a/\nb.txt\nc\n"
    assert child_names(shell.root) == ["a", "b.txt", "c"]
    assert shell.root.find("a").is_directory


def test_mkdir_duplicate(out, shell):
    shell.mkdir("docs")
    take(out)
    shell.mkdir("docs")
    assert take(out) == "mkdir: diretorio 'docs' ja existe\n"
    assert child_names(shell.root) == ["docs"]


def test_cd_and_path(shell):
    assert shell.current_path() == "/"
    assert shell.prompt() == "/~$ "
    shell.mkdir("docs")
    shell.cd("docs")
    shell.mkdir("sub")
    shell.cd("sub")
    assert shell.current_path() == "/docs/sub"
    shell.cd("..")
    assert shell.current_path() == "/docs"
    shell.cd("..")
    shell.cd("..")
    assert shell.cwd is shell.root


def test_cd_into_file_fails(out, shell):
    shell.touch("f.txt")
    take(out)
    shell.cd("f.txt")
    assert take(out) == "cd: diretorio 'f.txt' nao encontrado\n"
    assert shell.cwd is shell.root


@pytest.mark.parametrize(
    "name, data_type, permissions",
    [
        ("a.txt", DataType.TEXT, 644),
        ("a.exe", DataType.PROGRAM, 755),
        ("a.csv", DataType.CSV, 644),
        ("a.bin", DataType.UNKNOWN, 644),
        ("noext", DataType.UNKNOWN, 644),
    ],
)
def test_touch_types(shell, name, data_type, permissions):
    shell.touch(name)
    node = shell.root.find(name)
    assert node.kind is NodeKind.FILE
    assert node.meta.data_type is data_type
    assert node.meta.permissions == permissions


def test_touch_message(out, shell):
    take(out)
    shell.touch("a.csv")
    assert take(out) == "Arquivo 'a.csv' criado (tipo: dados).\n"
    assert shell.root.find("a.csv").meta.data_type is DataType.CSV


def test_echo_then_cat(out, shell):
    shell.execute("touch a.txt")
    shell.execute("echo a.txt hello world")
    take(out)
    shell.execute("cat a.txt")
    assert take(out) == "Conteudo de 'a.txt':\nhello world\n"
    assert shell.root.find("a.txt").meta.size == len("hello world")


def test_echo_allocates_blocks(shell):
    shell.touch("a.txt")
    text = "x" * 100
    shell.echo("a.txt", text)
    assert shell.disk.free_blocks == TOTAL_BLOCKS - blocks_needed(len(text))
    shell.echo("a.txt", "y")
    assert shell.disk.free_blocks == TOTAL_BLOCKS - blocks_needed(1)


def test_echo_missing_content(out, shell):
    shell.touch("a.txt")
    take(out)
    shell.execute("echo a.txt")
    assert take(out) == "echo: nome do arquivo e conteudo obrigatorios\n"
    assert shell.root.find("a.txt").meta.size == 0
    assert shell.disk.free_blocks == TOTAL_BLOCKS


def test_rm_frees_blocks_and_removes(shell):
    shell.touch("a.txt")
    shell.echo("a.txt", "hello")
    shell.rm("a.txt")
    assert shell.root.find("a.txt") is None
    assert shell.disk.free_blocks == TOTAL_BLOCKS


def test_rm_directory_refused(out, shell):
    shell.mkdir("d")
    take(out)
    shell.rm("d")
    assert take(out) == "rm: 'd' e um diretorio, comando rm apenas para arquivos\n"
    assert shell.root.find("d") is not None and shell.root.find("d").is_directory


def test_chmod_blocks_read(out, shell):
    shell.touch("a.txt")
    shell.execute("chmod 000 a.txt")
    take(out)
    shell.cat("a.txt")
    assert take(out) == "cat: sem permissao para ler o arquivo 'a.txt'\n"
    node = shell.root.find("a.txt")
    assert node.meta.permissions == 0
    assert shell.can_access(node, "r") is False


def test_su_other_denies_write(out, shell):
    shell.touch("a.txt")
    shell.su("other")
    assert shell.user is User.OTHER
    take(out)
    shell.echo("a.txt", "data")
    assert take(out) == "echo: sem permissao para escrever no arquivo 'a.txt'\n"


def test_su_invalid(out, shell):
    take(out)
    shell.su("root")
    assert take(out) == "su: use 'owner', 'group' ou 'other'\n"
    assert shell.user is User.OWNER


@pytest.mark.parametrize(
    "permissions, user, operation, expected",
    [
        (644, User.OWNER, "w", True),
        (644, User.GROUP, "w", False),
        (644, User.GROUP, "r", True),
        (755, User.OTHER, "x", True),
        (700, User.OTHER, "r", False),
        (0, User.OWNER, "r", False),
        (777, User.OTHER, "w", True),
    ],
)
def test_can_access(shell, permissions, user, operation, expected):
    shell.touch("f")
    node = shell.root.find("f")
    node.meta.permissions = permissions
    shell.user = user
    assert shell.can_access(node, operation) is expected


@pytest.mark.parametrize("text, value", [("abc", 0), ("644xyz", 644), ("700", 700)])
def test_chmod_parses_leading_integer(shell, text, value):
    shell.touch("f")
    shell.chmod(text, "f")
    assert shell.root.find("f").meta.permissions == value


def test_cp_copies(out, shell):
    shell.touch("a.txt")
    shell.echo("a.txt", "hello")
    shell.chmod("600", "a.txt")
    shell.cp("a.txt", "b.txt")
    copy = shell.root.find("b.txt")
    assert copy.content == "hello"
    assert copy.meta.permissions == 600
    assert copy.meta.inode != shell.root.find("a.txt").meta.inode
    take(out)
    shell.cp("a.txt", "b.txt")
    assert take(out) == "cp: arquivo 'b.txt' ja existe\n"


def test_mv_rename_keeps_order(out, shell):
    for name in ("m", "c", "x"):
        shell.touch(name)
    shell.mv("m", "a")
    assert shell.root.find("m") is None
    assert shell.root.find("a") is not None
    assert child_names(shell.root) == ["a", "c", "x"]


def test_mv_into_directory(shell):
    shell.mkdir("docs")
    shell.touch("a.txt")
    shell.echo("a.txt", "hi")
    shell.mv("a.txt", "/docs")
    assert shell.root.find("a.txt") is None
    moved = shell.root.find("docs").find("a.txt")
    assert moved.content == "hi"


def test_stat_reports_size(out, shell):
    shell.touch("a.txt")
    shell.echo("a.txt", "hello")
    take(out)
    shell.stat("a.txt")
    text = take(out)
    assert "Tamanho: 5 bytes" in text
    assert "Tipo de dado: texto" in text
    assert shell.root.find("a.txt").meta.size == 5


def test_block_stats(out, shell):
    take(out)
    shell.execute("statBlocos")
    text = take(out)
    assert "Blocos livres: 1000" in text
    assert "Espaco ocupado: 0 bytes" in text
    assert shell.disk.free_blocks == TOTAL_BLOCKS


@pytest.mark.parametrize(
    "line, message",
    [
        ("mkdir", "mkdir: nome do diretorio obrigatorio\n"),
        ("cp a", "cp: origem e destino obrigatorios\n"),
        ("foo", "Comando nao reconhecido: foo (digite 'help' para ajuda)\n"),
    ],
)
def test_execute_errors(out, shell, line, message):
    take(out)
    shell.execute(line)
    assert take(out) == message
    assert child_names(shell.root) == []
    assert shell.cwd is shell.root


def test_exit_raises(out, shell):
    with pytest.raises(ExitRequested):
        shell.execute("quit")
    assert out.getvalue().endswith("Saindo do sistema de arquivos...\n")


def test_run_until_eof(out, shell):
    code = shell.run(io.StringIO("mkdir docs\n\ncd docs\n"))
    text = out.getvalue()
    assert code == 0
    assert "/docs~$ " in text
    assert text.endswith("\nSaindo...\n")


def test_run_until_exit(out, shell):
    code = shell.run(io.StringIO("exit\nmkdir late\n"))
    assert code == 0
    assert shell.root.find("late") is None
    assert "Saindo do sistema de arquivos..." in out.getvalue()