"""Display functions for video commands - pure functions for Rich output."""

from __future__ import annotations

from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...content.models import VideoScriptStructured
from ...video.models import ThumbnailPromptOutput, VideoTitleOption, YouTubeSEOOutput


def show_titles(console: Console, titles: List[VideoTitleOption]) -> None:
    """Display thumbnail title options ranked as returned."""
    table = Table(title="Thumbnail Titles")
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Hook", justify="right")
    table.add_column("Reason", style="dim")

    for index, option in enumerate(titles, start=1):
        color = "green" if option.hook_factor >= 80 else "yellow" if option.hook_factor >= 60 else "red"
        table.add_row(str(index), option.title, f"[{color}]{option.hook_factor}[/{color}]", option.reason)

    console.print(table)


def show_seo(console: Console, seo: YouTubeSEOOutput) -> None:
    console.print(Panel(
        f"[bold]{seo.titulo.principal}[/bold]\n"
        f"[dim]{seo.titulo.caracteres} chars | {seo.titulo.formula_usada}[/dim]",
        title="Title",
        border_style="cyan",
    ))
    if seo.titulo.variacoes:
        console.print("\n".join(f"  [dim]-[/dim] {v}" for v in seo.titulo.variacoes))

    description = seo.descricao.corpo_completo or seo.descricao.above_the_fold
    console.print(Panel(description, title="Description", border_style="green"))
    console.print(f"[bold]Tags:[/bold] {', '.join(seo.tags.lista_ordenada)}")

    hashtags = seo.hashtags.acima_titulo + seo.hashtags.na_descricao
    if hashtags:
        console.print(" ".join(f"[blue]{tag}[/blue]" for tag in hashtags))


def show_script(console: Console, script: VideoScriptStructured) -> None:
    """Display a structured video script section by section."""
    meta = script.meta
    console.print(Panel(
        f"[bold]{script.thumbnail.titulo}[/bold]\n"
        f"Duração: [cyan]{meta.duracao_estimada}[/cyan] | Ângulo: [yellow]{meta.angulo_tribal}[/yellow]\n"
        f"[dim]{meta.valor_central}[/dim]",
        title="Roteiro",
        border_style="magenta",
    ))

    hook = script.roteiro.hook
    console.print(Panel(f"{hook.texto}\n\n[dim]{hook.nota_gravacao}[/dim]", title=f"Hook ({hook.tipo})"))

    table = Table(show_lines=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Tópico", style="bold")
    table.add_column("Insight")
    table.add_column("Transição", style="dim")
    for section in script.roteiro.desenvolvimento:
        table.add_row(str(section.numero), section.topico, section.insight, section.transicao)
    console.print(table)

    cta = script.roteiro.cta
    console.print(Panel(f"{cta.texto}\n\n[dim]{cta.proximo_passo}[/dim]", title="CTA", border_style="green"))


def show_thumbnail_prompt(console: Console, output: ThumbnailPromptOutput) -> None:
    specs = output.especificacoes
    console.print(Panel(output.prompt, title="Prompt", border_style="cyan"))
    if output.negative_prompt:
        console.print(Panel(output.negative_prompt, title="Negative prompt", border_style="red"))
    console.print(
        f"[bold]Texto:[/bold] {specs.texto}  "
        f"[dim]({specs.cor_texto} sobre {specs.cor_fundo}, {specs.posicao_texto})[/dim]"
    )
    for index, variation in enumerate(output.variacoes, start=1):
        console.print(f"  [dim]{index}.[/dim] {variation}")
