echo(f'<p class="title">{template.get("title", "untitled")}</p>')
