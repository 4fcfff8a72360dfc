from game.engine import CrazyEightsEngine
from game.models import Player
from controllers.cli_controller import CLIController

players = [Player("You"), Player("Computer")]
engine = CrazyEightsEngine(players)

cli = CLIController(engine)
cli.run()
