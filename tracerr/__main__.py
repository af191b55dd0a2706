from tracerr.commandline import args

args.parse()
