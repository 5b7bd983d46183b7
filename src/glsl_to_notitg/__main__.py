from .cli import main

main(prog_name='shadertoy2itg')
