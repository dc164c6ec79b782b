"""Simulated block device with contiguous first-fit allocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO, Union

TOTAL_BLOCKS = 1000
BLOCK_SIZE = 32


@dataclass
class BlockInfo:
    """Owner of a block and its index within the owning file; None when free."""

    inode: Optional[int] = None
    position: Optional[int] = None

    @property
    def free(self) -> bool:
        return self.inode is None


class DiskFullError(Exception):
    """No run of free blocks is long enough for a request."""

    def __init__(self, needed: int, free: int) -> None:
        super().__init__(
            "ERRO: Nao ha espaco contiguo suficiente no disco!\n"
            f"Blocos necessarios: {needed}, Blocos livres: {free}"
        )
        self.needed = needed
        self.free = free


def _blocks_for(size: int, block_size: int) -> int:
    if size < 0:
        raise ValueError(f"negative size: {size}")
    return -(-size // block_size)


def blocks_needed(size: int) -> int:
    """Number of blocks of the standard size needed to store ``size`` bytes."""
    return _blocks_for(size, BLOCK_SIZE)


class Disk:
    """Fixed-size array of blocks; each file occupies one contiguous run.

    Progress messages are written to ``out`` when it is given.
    """

    def __init__(
        self,
        total_blocks: int = TOTAL_BLOCKS,
        block_size: int = BLOCK_SIZE,
        out: Optional[TextIO] = None,
    ) -> None:
        self.total_blocks = total_blocks
        self.block_size = block_size
        self.data = [bytearray(block_size) for _ in range(total_blocks)]
        self.info = [BlockInfo() for _ in range(total_blocks)]
        self.free_blocks = total_blocks
        self._out = out
        self._say(
            f"Disco simulado inicializado: {total_blocks} blocos de {block_size} bytes cada"
        )

    @property
    def used_blocks(self) -> int:
        return self.total_blocks - self.free_blocks

    def _say(self, message: str) -> None:
        if self._out is not None:
            print(message, file=self._out)

    def find_contiguous(self, count: int) -> Optional[int]:
        """Return the lowest start of ``count`` free consecutive blocks, or None."""
        if count <= 0:
            return None
        run = 0
        for index, info in enumerate(self.info):
            run = run + 1 if info.free else 0
            if run == count:
                return index - count + 1
        return None

    def allocate(self, inode: int, count: int) -> Optional[int]:
        """Give ``inode`` a fresh run of ``count`` blocks and return its start.

        Blocks the inode already held are released first. Zero blocks allocates
        nothing and returns None. Raises DiskFullError when no run fits.
        """
        if count == 0:
            return None
        self.release(inode)
        start = self.find_contiguous(count)
        if start is None:
            raise DiskFullError(count, self.free_blocks)
        for position in range(count):
            info = self.info[start + position]
            info.inode = inode
            info.position = position
        self.free_blocks -= count
        self._say(
            f"Arquivo inode {inode}: {count} blocos alocados "
            f"(blocos {start}-{start + count - 1})"
        )
        return start

    def release(self, inode: int) -> int:
        """Free and zero every block held by ``inode``; return how many."""
        released = 0
        for info, block in zip(self.info, self.data):
            if info.inode == inode:
                info.inode = None
                info.position = None
                block[:] = bytes(self.block_size)
                released += 1
        self.free_blocks += released
        if released:
            self._say(f"Arquivo inode {inode}: {released} blocos liberados")
        return released

    def write_file(self, inode: int, content: Union[str, bytes]) -> Optional[int]:
        """Store ``content`` for ``inode`` and return the start block.

        Strings are stored as UTF-8. Raises DiskFullError when it does not fit.
        """
        payload = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        count = _blocks_for(len(payload), self.block_size)
        start = self.allocate(inode, count)
        if start is not None:
            for position in range(count):
                chunk = payload[position * self.block_size : (position + 1) * self.block_size]
                self.data[start + position][: len(chunk)] = chunk
        self._say(f"Conteudo gravado: {len(payload)} bytes em {count} blocos")
        return start

    def stats_report(self) -> str:
        """Return the usage summary, framed by blank lines."""
        lines = [
            "",
            "=== ESTATISTICAS DO DISCO ===",
            f"Total de blocos: {self.total_blocks}",
            f"Tamanho do bloco: {self.block_size} bytes",
            f"Blocos livres: {self.free_blocks}",
            f"Blocos ocupados: {self.used_blocks}",
            f"Espaco livre: {self.free_blocks * self.block_size} bytes",
            f"Espaco ocupado: {self.used_blocks * self.block_size} bytes",
            "=============================",
            "",
            "",
        ]
        return "\n".join(lines)