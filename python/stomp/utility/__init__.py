from stomp.utility.color_print import ColorLogger, color_string
