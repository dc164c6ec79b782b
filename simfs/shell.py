"""Interactive shell over the simulated file system."""

from __future__ import annotations

import re
import sys
import time
from typing import Optional, TextIO

from simfs.disk import Disk, DiskFullError
from simfs.tree import MAX_CONTENT, DataType, Node, NodeKind, User, data_type_label

_EXTENSION_TYPES = {
    ".txt": DataType.TEXT,
    ".exe": DataType.PROGRAM,
    ".csv": DataType.CSV,
}

_USERS = {
    "owner": User.OWNER,
    "group": User.GROUP,
    "other": User.OTHER,
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_HELP = """Comandos disponiveis:
  ls                        - listar arquivos e diretorios
  mkdir <dir>               - criar diretorio
  cd <dir>                  - mudar diretorio
  touch <arq>               - criar arquivo
  rm <arq>                  - remover arquivo (nao diretorio)
  echo <arq> <conteudo>     - adicionar conteudo ao arquivo
  cat <arq>                 - exibir conteudo do arquivo
  clear                     - limpar a tela
  cp <arq> <destinoCopia>   - copiar arquivo
  mv <arq> <arqNovoNome>    - renomear arquivo
  mv <arq> </dirDestino>    - mover arquivo para diretorio
  stat <arq>                - exibir informacoes do arquivo
  chmod <permissoes> <arq>  - alterar permissoes do arquivo (Ex: 644=rw- r-- r-- 755=rwx r-x r-x 700=rwx --- --- 666=rw- rw- rw- 777=rwx rwx rwx 000=--- --- ---)
  su <tipo>                 - mudar usuario (owner, group, other)
  statBlocos                - exibir estatisticas dos blocos do disco
  help                      - mostrar esta ajuda
  exit/quit                 - sair do programa"""


class ExitRequested(Exception):
    """Raised by ``exit``/``quit`` to end the session."""


def _now() -> int:
    return int(time.time())


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _next_token(text: str) -> tuple[Optional[str], str]:
    """Split off the next space-delimited token; the remainder skips one space."""
    text = text.lstrip(" ")
    if not text:
        return None, ""
    token, _, rest = text.partition(" ")
    return token, rest


class Shell:
    """Holds the directory tree, the disk and the session state."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.disk = Disk(out=self.out)
        self.root = Node("/", NodeKind.DIRECTORY, 0o755)
        self.cwd = self.root
        self.user = User.OWNER

    def _say(self, message: str, end: str = "\n") -> None:
        print(message, file=self.out, end=end)

    def mkdir(self, name: str) -> None:
        if self.cwd.find(name):
            self._say(f"mkdir: diretorio '{name}' ja existe")
            return
        self.cwd.add_child(Node(name, NodeKind.DIRECTORY, 755))
        self._say(f"Diretorio '{name}' criado.")

    def cd(self, name: str) -> None:
        if name == "..":
            if self.cwd.parent is not None:
                self.cwd = self.cwd.parent
            return
        target = self.cwd.find(name)
        if target is None or not target.is_directory:
            self._say(f"cd: diretorio '{name}' nao encontrado")
            return
        self.cwd = target

    def ls(self) -> None:
        for node in self.cwd.iter_children():
            self._say(node.meta.name + ("/" if node.is_directory else ""))

    def rm(self, name: str) -> None:
        node = self.cwd.find(name)
        if node is None:
            self._say(f"rm: arquivo ou diretorio '{name}' nao encontrado")
        elif node.is_directory:
            self._say(f"rm: '{name}' e um diretorio, comando rm apenas para arquivos")
        elif not self.can_access(node, "w"):
            self._say(f"rm: sem permissao para remover o arquivo '{name}'")
        else:
            self.disk.release(node.meta.inode)
            self.cwd.remove_child(name)
            self._say(f"Arquivo '{name}' removido.")

    def touch(self, name: str) -> None:
        if self.cwd.find(name):
            self._say(f"touch: arquivo '{name}' ja existe")
            return
        node = Node(name, NodeKind.FILE, 644)
        dot = name.rfind(".")
        extension = name[dot:] if dot >= 0 else None
        node.meta.data_type = _EXTENSION_TYPES.get(extension, DataType.UNKNOWN)
        if node.meta.data_type is DataType.PROGRAM:
            node.meta.permissions = 755
        self.cwd.add_child(node)
        self._say(f"Arquivo '{name}' criado (tipo: {data_type_label(node.meta.data_type)}).")

    def _find_file(self, name: str) -> Optional[Node]:
        node = self.cwd.find(name)
        if node is None or node.kind is not NodeKind.FILE:
            return None
        return node

    def echo(self, name: str, content: str) -> None:
        node = self._find_file(name)
        if node is None:
            self._say(f"echo: arquivo '{name}' nao encontrado")
            return
        if not self.can_access(node, "w"):
            self._say(f"echo: sem permissao para escrever no arquivo '{name}'")
            return
        try:
            self.disk.write_file(node.meta.inode, content)
        except DiskFullError as error:
            self._say(str(error))
        node.content = content[: MAX_CONTENT - 1]
        node.meta.size = len(node.content.encode("utf-8"))
        now = _now()
        node.meta.modified_at = now
        node.meta.accessed_at = now
        self._say(f"Conteudo adicionado ao arquivo '{name}'.")

    def cat(self, name: str) -> None:
        node = self._find_file(name)
        if node is None:
            self._say(f"cat: arquivo '{name}' nao encontrado")
            return
        if not self.can_access(node, "r"):
            self._say(f"cat: sem permissao para ler o arquivo '{name}'")
            return
        node.meta.accessed_at = _now()
        self._say(f"Conteudo de '{name}':\n{node.content}")

    def cp(self, source: str, target: str) -> None:
        original = self.cwd.find(source)
        if original is None:
            self._say(f"cp: arquivo '{source}' nao encontrado")
            return
        if original.kind is not NodeKind.FILE:
            self._say(f"cp: '{source}' nao e um arquivo")
            return
        if self.cwd.find(target):
            self._say(f"cp: arquivo '{target}' ja existe")
            return
        copy = Node(target, NodeKind.FILE, original.meta.permissions)
        copy.meta.size = original.meta.size
        copy.meta.data_type = original.meta.data_type
        copy.meta.modified_at = original.meta.modified_at
        copy.meta.accessed_at = original.meta.accessed_at
        copy.content = original.content
        self.cwd.add_child(copy)
        self._say(f"Arquivo '{source}' copiado para '{target}'.")

    def mv(self, source: str, target: str) -> None:
        node = self.cwd.find(source)
        if node is None:
            self._say(f"mv: arquivo '{source}' nao encontrado")
            return
        if node.kind is not NodeKind.FILE:
            self._say(f"mv: '{source}' nao e um arquivo")
            return
        target_name = target[1:] if target.startswith("/") else target
        directory = self.root.find(target_name)
        if directory is not None and directory.is_directory:
            if directory.find(node.meta.name):
                self._say(
                    f"mv: arquivo '{node.meta.name}' ja existe no diretorio '{target}'"
                )
                return
            self.cwd.remove_child(source)
            directory.add_child(node)
            self._say(f"Arquivo '{source}' movido para o diretorio '{target}'.")
            return
        if self.cwd.find(target_name):
            self._say(f"mv: arquivo '{target_name}' ja existe")
            return
        # Re-insert so the directory's search tree stays ordered by name.
        self.cwd.remove_child(source)
        node.meta.name = target_name
        node.meta.modified_at = _now()
        self.cwd.add_child(node)
        self._say(f"Arquivo '{source}' renomeado para '{target_name}'.")

    def stat(self, name: str) -> None:
        node = self._find_file(name)
        if node is None:
            self._say(f"stat: arquivo '{name}' nao encontrado")
            return
        meta = node.meta
        lines = [
            "=======================================",
            f"Informacoes do arquivo '{name}':",
            f"  Tamanho: {meta.size} bytes",
            f"  Tipo de dado: {data_type_label(meta.data_type)}",
            f"  Permissoes: {meta.permissions}",
            f"  Criado em: {time.ctime(meta.created_at)}",
            f"  Acessado em: {time.ctime(meta.accessed_at)}",
            f"  Modificado em: {time.ctime(meta.modified_at)}",
            f"  Acessado em: {time.ctime(meta.accessed_at)}",
            "=======================================",
        ]
        self._say("\n".join(lines))

    def can_access(self, node: Node, operation: str) -> bool:
        """Check ``operation`` ('r', 'w' or 'x') against decimal-digit permissions."""
        permissions = node.meta.permissions
        if permissions == 0:
            return False
        if permissions == 777:
            return True
        digits = {
            User.OWNER: (permissions // 100) % 10,
            User.GROUP: (permissions // 10) % 10,
            User.OTHER: permissions % 10,
        }
        digit = digits.get(self.user)
        if digit is None:
            return False
        if operation == "r":
            return digit >= 4
        if operation == "w":
            return digit in (2, 3, 6, 7)
        if operation == "x":
            return digit % 2 == 1
        return False

    def chmod(self, permissions: str, name: str) -> None:
        node = self._find_file(name)
        if node is None:
            self._say(f"chmod: arquivo '{name}' nao encontrado")
            return
        node.meta.permissions = _atoi(permissions)
        self._say(f"Permissoes de '{name}' alteradas para {permissions}")

    def su(self, user_type: str) -> None:
        user = _USERS.get(user_type)
        if user is None:
            self._say("su: use 'owner', 'group' ou 'other'")
            return
        self.user = user
        self._say(f"Voce agora possui permissao {user.name}")

    def block_stats(self) -> None:
        self._say(self.disk.stats_report(), end="")

    def current_path(self) -> str:
        names = []
        node = self.cwd
        while node is not None and node.parent is not None:
            names.append(node.meta.name)
            node = node.parent
        return "/" + "/".join(reversed(names))

    def prompt(self) -> str:
        return f"{self.current_path()}~$ "

    def execute(self, line: str) -> None:
        """Run one command line. Raises ExitRequested on ``exit``/``quit``."""
        line = line.split("\n", 1)[0]
        command, rest = _next_token(line)
        if command is None:
            return

        def arg() -> Optional[str]:
            nonlocal rest
            token, rest = _next_token(rest)
            return token

        single = {
            "mkdir": (self.mkdir, "mkdir: nome do diretorio obrigatorio"),
            "cd": (self.cd, "cd: nome do diretorio obrigatorio"),
            "touch": (self.touch, "touch: nome do arquivo obrigatorio"),
            "rm": (self.rm, "rm: nome do arquivo obrigatorio"),
            "cat": (self.cat, "cat: nome do arquivo obrigatorio"),
            "stat": (self.stat, "stat: nome do arquivo obrigatorio"),
            "su": (self.su, "su: tipo de usuario obrigatorio (owner, group, other)"),
        }
        double = {
            "cp": (self.cp, "cp: origem e destino obrigatorios"),
            "mv": (self.mv, "mv: origem e destino obrigatorios"),
            "chmod": (self.chmod, "chmod: permissoes e nome do arquivo obrigatorios"),
        }

        if command == "ls":
            self.ls()
        elif command in single:
            handler, usage = single[command]
            name = arg()
            if name:
                handler(name)
            else:
                self._say(usage)
        elif command in double:
            handler, usage = double[command]
            first, second = arg(), arg()
            if first and second:
                handler(first, second)
            else:
                self._say(usage)
        elif command == "echo":
            name = arg()
            content = rest if name and rest else None
            if name and content:
                self.echo(name, content)
            else:
                self._say("echo: nome do arquivo e conteudo obrigatorios")
        elif command == "statBlocos":
            self.block_stats()
        elif command in ("exit", "quit"):
            self._say("Saindo do sistema de arquivos...")
            raise ExitRequested
        elif command == "clear":
            self._say("\033[H\033[J", end="")
        elif command == "help":
            self._say(_HELP)
        else:
            self._say(f"Comando nao reconhecido: {command} (digite 'help' para ajuda)")

    def run(self, stream: TextIO) -> int:
        """Read commands from ``stream`` until end of input or ``exit``."""
        self._say("=== Sistema de Arquivos Simulado ===")
        self._say("Digite 'help' para ver os comandos disponiveis")
        self._say("Digite 'exit' ou 'quit' para sair\n")
        while True:
            self.out.write(self.prompt())
            self.out.flush()
            line = stream.readline()
            if not line:
                self._say("\nSaindo...")
                return 0
            if len(line) <= 1:
                continue
            try:
                self.execute(line)
            except ExitRequested:
                return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Start an interactive session on standard input and output."""
    return Shell().run(sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())