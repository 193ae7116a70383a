echo("""<div
    class="view view--dummy"
    data-view-breakpoint-pointer="99ccf293-c1b0-41b2-a1c8-033776ac6f10"
>
    <p class="view__content">Breakpoints</p>
</div>""")
