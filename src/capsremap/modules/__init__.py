# capsremap.modules - platform integrations
