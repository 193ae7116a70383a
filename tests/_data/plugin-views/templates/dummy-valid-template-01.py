echo(
    '<a href="https://example.com" class="test" target="_blank" title="Test Link"'
    ' data-link="automated-tests">Test Link</a>'
)
